"""
src/simplestocks/utils/exceptions.py

Shared exception classes used across the simplestocks package.

Every error derives from ``ExchangeError`` and from the closest builtin,
so callers can catch either the whole family or ``ValueError``/``KeyError``.
"""


class ExchangeError(Exception):
    """Base class for all errors raised by the exchange engine."""


class ValidationError(ExchangeError, ValueError):
    """Raised when an input is malformed (non-positive price, negative dividend, ...)."""


class ConfigurationError(ValidationError):
    """Raised when a configuration value is invalid or missing."""


class DuplicateInstrumentError(ExchangeError, ValueError):
    """Raised when an instrument is registered twice."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Instrument {symbol} has already been registered")
        self.symbol = symbol


class InstrumentNotFoundError(ExchangeError, KeyError):
    """Raised when an instrument has no registry entry."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Instrument {symbol} has not been registered")
        self.symbol = symbol

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0])


class InsufficientDataError(ExchangeError, ValueError):
    """Raised when there are no qualifying trades for the requested metric."""


class PriceUnavailableError(ExchangeError, ValueError):
    """Raised when an instrument has not traded yet, so it has no ticker price."""


class EPSUnavailableError(ExchangeError, ValueError):
    """Raised when earnings per share is zero or negative."""
