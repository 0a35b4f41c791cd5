"""
simplestocks - In-memory stock exchange engine.

Registers instruments, records trades, and derives market metrics
(weighted stock price, dividend yield, P/E ratio, all-share index)
from a trailing window of recent trades.
"""

# Logging & errors (imported before config, which needs the exceptions module)
from simplestocks.utils import (
    ConfigurationError,
    DuplicateInstrumentError,
    EPSUnavailableError,
    ExchangeError,
    InstrumentNotFoundError,
    InsufficientDataError,
    PriceUnavailableError,
    ValidationError,
    get_logger,
)

# Configuration
from simplestocks.config import Settings, settings

# Trades and ledger
from simplestocks.core import Trade, TradeLedger, utc_now

# Instruments and registry
from simplestocks.data import Common, DividendTerms, Instrument, InstrumentRegistry, Preferred, Ticker, load_catalog

# Shared type definitions
from simplestocks.data_types import DividendClass, Side

# Exchange
from simplestocks.exchange import StockExchange

# Metrics
from simplestocks.metrics import InstrumentMetrics, MarketSnapshot, PriceAccumulator

__version__ = "0.1.0"

__all__ = [
    # Exchange
    "StockExchange",
    # Instruments and registry
    "Common",
    "DividendTerms",
    "Instrument",
    "InstrumentRegistry",
    "Preferred",
    "Ticker",
    "load_catalog",
    # Trades and ledger
    "Trade",
    "TradeLedger",
    "utc_now",
    # Metrics
    "InstrumentMetrics",
    "MarketSnapshot",
    "PriceAccumulator",
    # Shared type definitions
    "DividendClass",
    "Side",
    # Errors
    "ConfigurationError",
    "DuplicateInstrumentError",
    "EPSUnavailableError",
    "ExchangeError",
    "InstrumentNotFoundError",
    "InsufficientDataError",
    "PriceUnavailableError",
    "ValidationError",
    # Configuration & logging
    "Settings",
    "settings",
    "get_logger",
]
