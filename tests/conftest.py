"""
Shared fixtures for the test suite.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from simplestocks.data.instrument import Common, DividendTerms, Preferred
from simplestocks.data.registry import InstrumentRegistry
from simplestocks.exchange import StockExchange

DATA_DIR = Path(__file__).resolve().parent / "data"
CATALOG_CSV = DATA_DIR / "catalog.csv"

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)

TEA = Common("TEA")
POP = Common("POP")
ALE = Common("ALE")
GIN = Preferred("GIN")
JOE = Common("JOE")

POP_LAST_DIVIDEND = 8
GIN_FIXED_DIVIDEND = "0.02"
GIN_PAR_VALUE = 100

CATALOG = [
    {"symbol": "TEA", "dividend_class": "COMMON", "last_dividend": 0, "par_value": 100},
    {"symbol": "POP", "dividend_class": "COMMON", "last_dividend": POP_LAST_DIVIDEND, "par_value": 100},
    {"symbol": "ALE", "dividend_class": "COMMON", "last_dividend": 23, "par_value": 60},
    {
        "symbol": "GIN",
        "dividend_class": "PREFERRED",
        "last_dividend": 8,
        "fixed_dividend": GIN_FIXED_DIVIDEND,
        "par_value": GIN_PAR_VALUE,
    },
    {"symbol": "JOE", "dividend_class": "COMMON", "last_dividend": 13, "par_value": 250},
]


@pytest.fixture
def catalog_csv_path():
    """Path to the sample instrument catalog CSV fixture."""
    return CATALOG_CSV


@pytest.fixture
def registry():
    """Registry holding the five sample instruments."""
    return InstrumentRegistry.from_catalog(CATALOG)


@pytest.fixture
def exchange(registry):
    """Exchange over the sample registry whose clock is frozen at NOW."""
    return StockExchange(registry, clock=lambda: NOW)


def minutes_ago(minutes: float, base: datetime = NOW) -> datetime:
    """Timestamp ``minutes`` before ``base``."""
    return base - timedelta(minutes=minutes)


def make_terms(last_dividend=8, par_value=100, fixed_dividend=None) -> DividendTerms:
    return DividendTerms(last_dividend=last_dividend, par_value=par_value, fixed_dividend=fixed_dividend)
