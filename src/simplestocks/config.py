"""
src/simplestocks/config.py

Centralised configuration loaded from environment variables.

Create a ``.env`` file in the project root (see ``.env.example``)
or export variables in your shell.  Values that are not set fall
back to sensible defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from simplestocks.utils.exceptions import ConfigurationError

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Exchange-wide settings, each backed by an environment variable.

    Construct with no arguments for env-var defaults, or pass explicit
    values to override (useful in tests).
    """

    ## Logging

    EXCHANGE_LOG_LEVEL: str = os.environ.get("EXCHANGE_LOG_LEVEL", "INFO").upper()
    """Python logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    Default: ``INFO``"""

    EXCHANGE_LOG_FORMAT: str = os.environ.get("EXCHANGE_LOG_FORMAT", "[%(asctime)s] %(levelname)s:%(name)s: %(message)s")
    """Format string for log messages (stdlib ``logging`` syntax).
    Default: ``[%(asctime)s] %(levelname)s:%(name)s: %(message)s``"""

    EXCHANGE_LOG_DATE_FORMAT: str = os.environ.get("EXCHANGE_LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
    """Date format for log timestamps (``strftime`` syntax).
    Default: ``%Y-%m-%d %H:%M:%S``"""

    ## Metrics

    EXCHANGE_WINDOW_MINUTES: int = int(os.environ.get("EXCHANGE_WINDOW_MINUTES", "15"))
    """Trailing window, in minutes, used for stock prices and the all-share index.
    Default: ``15``"""

    EXCHANGE_PRICE_PLACES: int = int(os.environ.get("EXCHANGE_PRICE_PLACES", "2"))
    """Decimal places kept for weighted prices and the index (rounded half-up).
    Default: ``2``"""

    EXCHANGE_RATIO_PLACES: int = int(os.environ.get("EXCHANGE_RATIO_PLACES", "4"))
    """Decimal places kept for dividend yields and P/E ratios (rounded half-up).
    Default: ``4``"""

    def __post_init__(self) -> None:
        """Validate settings on creation."""
        _VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.EXCHANGE_LOG_LEVEL not in _VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"EXCHANGE_LOG_LEVEL={self.EXCHANGE_LOG_LEVEL!r} - "
                f"must be one of {sorted(_VALID_LOG_LEVELS)}"
            )

        if self.EXCHANGE_WINDOW_MINUTES < 1:
            raise ConfigurationError(
                f"EXCHANGE_WINDOW_MINUTES={self.EXCHANGE_WINDOW_MINUTES} - "
                f"must be a positive number of minutes"
            )

        for name in ("EXCHANGE_PRICE_PLACES", "EXCHANGE_RATIO_PLACES"):
            value = getattr(self, name)
            if not (0 <= value <= 10):
                raise ConfigurationError(f"{name}={value} - must be between 0 and 10")

    @property
    def EXCHANGE_LOG_LEVEL_INT(self) -> int:
        """Return the logging level as an ``int`` usable by the stdlib."""
        return getattr(logging, self.EXCHANGE_LOG_LEVEL, logging.INFO)


settings = Settings()
