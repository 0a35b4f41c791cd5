"""
src/simplestocks/data/instrument.py

Instrument abstraction plus the per-instrument dividend and price state
(the ticker) that the registry owns.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from simplestocks.data_types.dividend_class import DividendClass
from simplestocks.utils.exceptions import ValidationError
from simplestocks.utils.numeric import Number, to_decimal

_ZERO = Decimal(0)


@dataclass(frozen=True)
class Instrument:
    """
    A tradeable security.

    Attributes:
        symbol: Ticker symbol, the registry key (e.g. 'TEA')
        dividend_class: COMMON or PREFERRED, fixed at creation
    """
    symbol: str
    dividend_class: DividendClass = DividendClass.COMMON

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise ValidationError(f"symbol must be a non-empty string, got {self.symbol!r}")
        try:
            object.__setattr__(self, "dividend_class", DividendClass(self.dividend_class))
        except ValueError as exc:
            raise ValidationError(f"unknown dividend class {self.dividend_class!r}") from exc

    def __str__(self) -> str:
        return self.symbol


def Common(symbol: str) -> Instrument:
    """
    Create a common stock, whose dividend is its last dividend.

    Args:
        symbol: Ticker symbol (e.g. 'POP')
    """
    return Instrument(symbol=symbol, dividend_class=DividendClass.COMMON)


def Preferred(symbol: str) -> Instrument:
    """
    Create a preferred stock, whose dividend is fixed dividend times par value.

    Args:
        symbol: Ticker symbol (e.g. 'GIN')
    """
    return Instrument(symbol=symbol, dividend_class=DividendClass.PREFERRED)


@dataclass(frozen=True)
class DividendTerms:
    """
    Dividend and par figures supplied when an instrument is registered.

    Attributes:
        last_dividend: Last dividend paid per share (>= 0)
        par_value: Nominal value per share (> 0)
        fixed_dividend: Fixed dividend rate as a fraction, preferred stocks only
    """
    last_dividend: Number
    par_value: Number
    fixed_dividend: Number | None = None


class Ticker:
    """
    Mutable market and dividend state of one registered instrument.

    The ticker price starts at zero (never traded) and is overwritten by
    every recorded trade. Dividend attributes are validated on every
    assignment, so a ticker can never hold a negative dividend, a
    non-positive par value, or a fixed dividend on a common stock.
    """

    ## Magic methods

    def __init__(
        self,
        instrument: Instrument,
        last_dividend: Number,
        par_value: Number,
        fixed_dividend: Number | None = None,
    ) -> None:
        self.instrument = instrument
        self.last_dividend = last_dividend
        self.par_value = par_value
        if instrument.dividend_class is DividendClass.PREFERRED:
            if fixed_dividend is None:
                raise ValidationError(f"preferred stock {instrument} requires a fixed dividend")
            self.fixed_dividend = fixed_dividend
        elif fixed_dividend is not None:
            raise ValidationError(f"common stock {instrument} cannot carry a fixed dividend")
        else:
            self._fixed_dividend: Decimal | None = None
        self._ticker_price = _ZERO

    def __repr__(self) -> str:
        return (
            f"Ticker(symbol={self.symbol!r}, last_dividend={self.last_dividend}, "
            f"fixed_dividend={self.fixed_dividend}, par_value={self.par_value}, "
            f"ticker_price={self.ticker_price})"
        )

    @classmethod
    def from_terms(cls, instrument: Instrument, terms: DividendTerms) -> Ticker:
        """Build a ticker from registration terms."""
        return cls(
            instrument,
            last_dividend=terms.last_dividend,
            par_value=terms.par_value,
            fixed_dividend=terms.fixed_dividend,
        )

    ## Properties

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def last_dividend(self) -> Decimal:
        return self._last_dividend

    @last_dividend.setter
    def last_dividend(self, value: Number) -> None:
        amount = to_decimal(value, "last_dividend")
        if amount < 0:
            raise ValidationError(f"last_dividend must be >= 0, got {amount}")
        self._last_dividend = amount

    @property
    def par_value(self) -> Decimal:
        return self._par_value

    @par_value.setter
    def par_value(self, value: Number) -> None:
        amount = to_decimal(value, "par_value")
        if amount <= 0:
            raise ValidationError(f"par_value must be > 0, got {amount}")
        self._par_value = amount

    @property
    def fixed_dividend(self) -> Decimal | None:
        """Fixed dividend rate as a fraction (0.02 = 2%), None for common stocks."""
        return self._fixed_dividend

    @fixed_dividend.setter
    def fixed_dividend(self, value: Number) -> None:
        if self.instrument.dividend_class is not DividendClass.PREFERRED:
            raise ValidationError(f"common stock {self.instrument} cannot carry a fixed dividend")
        rate = to_decimal(value, "fixed_dividend")
        if rate <= 0:
            raise ValidationError(f"fixed_dividend must be > 0, got {rate}")
        self._fixed_dividend = rate

    @property
    def ticker_price(self) -> Decimal:
        """Last traded price, zero until the first trade."""
        return self._ticker_price

    @ticker_price.setter
    def ticker_price(self, value: Number) -> None:
        price = to_decimal(value, "ticker_price")
        if price <= 0:
            raise ValidationError(f"ticker_price must be > 0, got {price}")
        self._ticker_price = price

    @property
    def has_price(self) -> bool:
        return self._ticker_price > 0

    @property
    def dividend(self) -> Decimal:
        """
        Dividend per share.

        COMMON: last dividend. PREFERRED: fixed dividend times par value.
        """
        if self.instrument.dividend_class is DividendClass.COMMON:
            return self.last_dividend
        return self.fixed_dividend * self.par_value

    @property
    def earnings_per_share(self) -> Decimal:
        # approximated by the last dividend, no earnings data is tracked
        return self.last_dividend
