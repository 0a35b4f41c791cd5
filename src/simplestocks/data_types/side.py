"""
src/simplestocks/data_types/side.py

Trade side indicator.
"""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """
    Whether a recorded trade was a buy or a sell.
    """
    BUY = "BUY"
    SELL = "SELL"
