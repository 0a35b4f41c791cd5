"""
src/simplestocks/data_types/dividend_class.py

Dividend classification for tradeable instruments.
"""

from __future__ import annotations

from enum import StrEnum


class DividendClass(StrEnum):
    """
    How an instrument's dividend is derived.

    Values:
        COMMON: dividend is the last dividend paid
        PREFERRED: dividend is the fixed dividend rate times the par value
    """
    COMMON = "COMMON"
    PREFERRED = "PREFERRED"
