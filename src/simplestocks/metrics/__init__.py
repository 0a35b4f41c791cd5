"""
simplestocks.metrics - Market metrics and snapshots.
"""

from simplestocks.metrics.market import (
    PriceAccumulator,
    accumulate_by_symbol,
    all_share_index,
    dividend_yield,
    dividend_yield_percent,
    geometric_mean,
    price_earnings_ratio,
    weighted_stock_price,
)
from simplestocks.metrics.snapshot import InstrumentMetrics, MarketSnapshot

__all__ = [
    "InstrumentMetrics",
    "MarketSnapshot",
    "PriceAccumulator",
    "accumulate_by_symbol",
    "all_share_index",
    "dividend_yield",
    "dividend_yield_percent",
    "geometric_mean",
    "price_earnings_ratio",
    "weighted_stock_price",
]
