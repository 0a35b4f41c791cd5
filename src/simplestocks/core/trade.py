"""
src/simplestocks/core/trade.py

Trade, an immutable record of an execution reported to the exchange.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from simplestocks.data.instrument import Instrument
from simplestocks.data_types.side import Side
from simplestocks.utils.exceptions import ValidationError
from simplestocks.utils.numeric import Number, to_decimal


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def require_aware(timestamp: datetime, name: str = "timestamp") -> datetime:
    """Reject anything that is not a timezone-aware datetime."""
    if not isinstance(timestamp, datetime):
        raise ValidationError(f"{name} must be a datetime, got {timestamp!r}")
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        raise ValidationError(f"{name} must be timezone-aware, got {timestamp!r}")
    return timestamp


@dataclass(frozen=True)
class Trade:
    """
    A trade execution. Never mutated once created.

    Attributes:
        timestamp: When the trade happened (timezone-aware)
        instrument: Traded instrument
        side: BUY or SELL
        quantity: Number of shares exchanged (> 0)
        price: Price per share (> 0), stored as Decimal
    """

    timestamp: datetime
    instrument: Instrument
    side: Side
    quantity: int
    price: Decimal

    def __post_init__(self) -> None:
        require_aware(self.timestamp)
        if not isinstance(self.instrument, Instrument):
            raise ValidationError(f"instrument must be an Instrument, got {self.instrument!r}")
        try:
            object.__setattr__(self, "side", Side(self.side))
        except ValueError as exc:
            raise ValidationError(f"unknown trade side {self.side!r}") from exc
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity <= 0:
            raise ValidationError(f"quantity must be > 0, got {self.quantity}")
        price = to_decimal(self.price, "price")
        if price <= 0:
            raise ValidationError(f"price must be > 0, got {price}")
        object.__setattr__(self, "price", price)

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def notional(self) -> Decimal:
        """Traded value: quantity times price."""
        return self.price * self.quantity

    @classmethod
    def buy(
        cls,
        instrument: Instrument,
        quantity: int,
        price: Number,
        timestamp: datetime | None = None,
    ) -> Trade:
        """Create a BUY trade, timestamped now unless a timestamp is given."""
        return cls(timestamp or utc_now(), instrument, Side.BUY, quantity, price)

    @classmethod
    def sell(
        cls,
        instrument: Instrument,
        quantity: int,
        price: Number,
        timestamp: datetime | None = None,
    ) -> Trade:
        """Create a SELL trade, timestamped now unless a timestamp is given."""
        return cls(timestamp or utc_now(), instrument, Side.SELL, quantity, price)
