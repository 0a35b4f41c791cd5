"""
simplestocks.utils - Logging, decimal helpers, CLI formatting, and shared exceptions.
"""

from simplestocks.utils.exceptions import (
    ConfigurationError,
    DuplicateInstrumentError,
    EPSUnavailableError,
    ExchangeError,
    InstrumentNotFoundError,
    InsufficientDataError,
    PriceUnavailableError,
    ValidationError,
)
from simplestocks.utils.logger import get_logger

__all__ = [
    "ConfigurationError",
    "DuplicateInstrumentError",
    "EPSUnavailableError",
    "ExchangeError",
    "InstrumentNotFoundError",
    "InsufficientDataError",
    "PriceUnavailableError",
    "ValidationError",
    "get_logger",
]
