"""
simplestocks.core - Trades and the ordered trade ledger.
"""

from simplestocks.core.ledger import TradeLedger
from simplestocks.core.trade import Trade, utc_now

__all__ = [
    "Trade",
    "TradeLedger",
    "utc_now",
]
