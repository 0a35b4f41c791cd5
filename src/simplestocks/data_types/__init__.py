"""
src/simplestocks/data_types/

Shared type definitions used across the package.
"""

from simplestocks.data_types.dividend_class import DividendClass
from simplestocks.data_types.side import Side

__all__ = [
    "DividendClass",
    "Side",
]
