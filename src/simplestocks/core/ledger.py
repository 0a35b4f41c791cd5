"""
src/simplestocks/core/ledger.py

Append-only trade ledger kept in timestamp order.

Uses a sorted list so trailing-window queries are a binary search.
A counter ensures FIFO ordering for trades with identical timestamps.
"""

from __future__ import annotations

import bisect
import math
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pandas as pd

from simplestocks.core.trade import Trade, require_aware
from simplestocks.data.registry import InstrumentRegistry
from simplestocks.utils.exceptions import InstrumentNotFoundError, ValidationError
from simplestocks.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class _LedgerEntry:
    """
    Internal wrapper for ledger entries with proper comparison.

    Attributes:
        timestamp: Trade timestamp for primary ordering
        counter: Insertion counter for FIFO tiebreaking
        trade: The recorded trade
    """

    timestamp: datetime
    counter: int
    trade: Trade

    def __lt__(self, other: _LedgerEntry) -> bool:
        """
        Compare by timestamp first, then by counter for FIFO.
        """
        if self.timestamp != other.timestamp:
            return self.timestamp < other.timestamp
        return self.counter < other.counter

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, _LedgerEntry):
            return NotImplemented
        return self.timestamp == other.timestamp and self.counter == other.counter


def _check_minutes(minutes_back: Any) -> timedelta | None:
    if isinstance(minutes_back, bool) or not isinstance(minutes_back, (int, float)):
        raise ValidationError(f"minutes_back must be a number, got {minutes_back!r}")
    if not minutes_back > 0:
        raise ValidationError(f"minutes_back must be > 0, got {minutes_back}")
    if isinstance(minutes_back, float) and math.isinf(minutes_back):
        return None
    try:
        return timedelta(minutes=minutes_back)
    except OverflowError:
        # longer than timedelta can hold, so the window has no lower bound
        return None


class TradeLedger:
    """
    Ordered, append-only store of recorded trades.

    Recording a trade updates the instrument's ticker price and inserts the
    trade under one lock, so a reader never sees one effect without the
    other. Trades for unregistered instruments are rejected before either
    effect is applied.

    Example:
        >>> ledger = TradeLedger(registry)
        >>> ledger.record(Trade.buy(tea, 10, "101.25"))
        >>> recent = ledger.windowed(utc_now(), 15)
    """

    ## Magic methods

    def __init__(self, registry: InstrumentRegistry) -> None:
        """
        Initialize an empty ledger bound to a registry.
        """
        self.registry = registry
        self._entries: list[_LedgerEntry] = []
        self._counter = count()
        self._lock = threading.RLock()
        logger.debug("TradeLedger initialized")

    def __len__(self) -> int:
        """
        Return the number of recorded trades.
        """
        return len(self._entries)

    def __bool__(self) -> bool:
        return len(self._entries) > 0

    def __iter__(self) -> Iterator[Trade]:
        """
        Iterate a snapshot of all trades in ledger order.
        """
        with self._lock:
            trades = [entry.trade for entry in self._entries]
        return iter(trades)

    ## Public methods

    def record(self, trade: Trade) -> None:
        """
        Record a trade and make its price the instrument's ticker price.

        Args:
            trade: Trade to record

        Raises:
            InstrumentNotFoundError: If the trade's instrument is not registered,
                or is registered with a different dividend class.
            ValidationError: If the argument is not a Trade.
        """
        if not isinstance(trade, Trade):
            raise ValidationError(f"expected a Trade, got {trade!r}")
        ticker = self.registry.lookup(trade.instrument)
        if ticker.instrument != trade.instrument:
            raise InstrumentNotFoundError(f"{trade.symbol} ({trade.instrument.dividend_class})")
        with self._lock:
            ticker.ticker_price = trade.price
            entry = _LedgerEntry(
                timestamp=trade.timestamp,
                counter=next(self._counter),
                trade=trade,
            )
            bisect.insort(self._entries, entry)
            size = len(self._entries)
        logger.debug(
            "Recorded %s %d %s @ %s at %s (ledger size: %d)",
            trade.side.name,
            trade.quantity,
            trade.symbol,
            trade.price,
            trade.timestamp,
            size,
        )

    def windowed(self, as_of: datetime, minutes_back: int | float) -> list[Trade]:
        """
        Return trades newer than ``as_of`` minus ``minutes_back`` minutes.

        The lower bound is open: a trade exactly at the cutoff is excluded.
        There is no upper bound, trades after ``as_of`` are included.
        A window reaching back past the earliest representable datetime has
        no lower bound either and returns every trade.

        Args:
            as_of: Reference instant (timezone-aware)
            minutes_back: Window length in minutes (> 0)

        Returns:
            Matching trades in ledger order.

        Raises:
            ValidationError: If ``minutes_back`` is not positive or ``as_of`` is naive.
        """
        span = _check_minutes(minutes_back)
        as_of = require_aware(as_of, "as_of")
        try:
            cutoff = as_of - span if span is not None else None
        except OverflowError:
            cutoff = None
        with self._lock:
            start = 0 if cutoff is None else bisect.bisect_right(self._entries, cutoff, key=lambda e: e.timestamp)
            trades = [entry.trade for entry in self._entries[start:]]
        logger.debug("Window (%s, ...] holds %d of %d trades", cutoff, len(trades), len(self._entries))
        return trades

    @contextmanager
    def frozen(self) -> Iterator[TradeLedger]:
        """
        Hold the ledger lock for the duration of the block.

        No trade is recorded, and no ticker price is moved by one, until the
        block exits, so several reads inside it see the same market state.
        """
        with self._lock:
            yield self

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the ledger as a DataFrame, one row per trade in ledger order.
        """
        columns = ["timestamp", "symbol", "side", "quantity", "price", "notional"]
        records = [
            {
                "timestamp": trade.timestamp,
                "symbol": trade.symbol,
                "side": str(trade.side),
                "quantity": trade.quantity,
                "price": trade.price,
                "notional": trade.notional,
            }
            for trade in self
        ]
        return pd.DataFrame(records, columns=columns)
