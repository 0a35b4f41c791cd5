"""
src/simplestocks/metrics/snapshot.py

Point-in-time view of every market metric on the exchange.

Metrics whose preconditions are unmet are reported as None, never as zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pandas as pd

from simplestocks.data_types.dividend_class import DividendClass
from simplestocks.utils.cli import BOLD, RESET, format_optional


@dataclass(frozen=True)
class InstrumentMetrics:
    """
    Metrics of a single instrument.

    Attributes:
        symbol: Instrument symbol
        dividend_class: COMMON or PREFERRED
        stock_price: Volume-weighted price over the window, None without trades
        dividend_yield: Dividend yield, None if the instrument never traded
        pe_ratio: Price/earnings ratio, None if EPS or price is unavailable
        trade_count: Number of trades in the window
    """

    symbol: str
    dividend_class: DividendClass
    stock_price: Decimal | None
    dividend_yield: Decimal | None
    pe_ratio: Decimal | None
    trade_count: int


@dataclass(frozen=True)
class MarketSnapshot:
    """
    All instrument metrics plus the all-share index at one instant.

    Attributes:
        as_of: Reference instant the window ends at
        window_minutes: Window length used for prices and the index
        instruments: Per-instrument metrics in registration order
        all_share_index: Geometric mean of available prices, None if none are
    """

    as_of: datetime
    window_minutes: int
    instruments: list[InstrumentMetrics]
    all_share_index: Decimal | None

    def __str__(self) -> str:
        """
        Format the snapshot for terminal display.
        """
        lines = [
            "MarketSnapshot(",
            f"  {BOLD}as_of:{RESET} {self.as_of:%Y-%m-%d %H:%M:%S %Z} (window {self.window_minutes} min)",
            f"  {BOLD}all_share_index:{RESET} {format_optional(self.all_share_index)}",
            f"  {BOLD}Instruments:{RESET}",
        ]
        for m in self.instruments:
            lines.append(
                f"    {m.symbol:<6} {m.dividend_class:<9} "
                f"price={format_optional(m.stock_price)}  "
                f"yield={format_optional(m.dividend_yield, '{:.2%}')}  "
                f"pe={format_optional(m.pe_ratio)}  "
                f"trades={m.trade_count}"
            )
        lines.append(")")
        return "\n".join(lines)

    def get(self, symbol: str) -> InstrumentMetrics:
        """
        Metrics of one instrument.

        Raises:
            KeyError: If the symbol is not part of the snapshot.
        """
        for m in self.instruments:
            if m.symbol == symbol:
                return m
        raise KeyError(symbol)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return one row per instrument, indexed by symbol.
        """
        columns = ["symbol", "dividend_class", "stock_price", "dividend_yield", "pe_ratio", "trade_count"]
        records = [
            {
                "symbol": m.symbol,
                "dividend_class": str(m.dividend_class),
                "stock_price": m.stock_price,
                "dividend_yield": m.dividend_yield,
                "pe_ratio": m.pe_ratio,
                "trade_count": m.trade_count,
            }
            for m in self.instruments
        ]
        return pd.DataFrame(records, columns=columns).set_index("symbol")
