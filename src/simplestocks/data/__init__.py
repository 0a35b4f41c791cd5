"""
simplestocks.data - Instrument abstraction and registry management.
"""

from simplestocks.data.instrument import Common, DividendTerms, Instrument, Preferred, Ticker
from simplestocks.data.registry import InstrumentRegistry, load_catalog

__all__ = [
    "Common",
    "DividendTerms",
    "Instrument",
    "InstrumentRegistry",
    "Preferred",
    "Ticker",
    "load_catalog",
]
