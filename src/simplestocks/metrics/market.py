"""
src/simplestocks/metrics/market.py

Market metrics calculated from recorded trades and ticker state.

Weighted stock price, dividend yield, price/earnings ratio, and the
all-share index (geometric mean of weighted prices). All arithmetic is
Decimal; results are rounded half-up to the configured number of places.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from simplestocks.config import settings
from simplestocks.core.trade import Trade
from simplestocks.data.instrument import Instrument, Ticker
from simplestocks.utils.exceptions import EPSUnavailableError, InsufficientDataError, PriceUnavailableError
from simplestocks.utils.logger import get_logger
from simplestocks.utils.numeric import quantize

logger = get_logger(__name__)

# rounding (from config / env vars)
PRICE_PLACES = settings.EXCHANGE_PRICE_PLACES
RATIO_PLACES = settings.EXCHANGE_RATIO_PLACES

_HUNDRED = Decimal(100)


@dataclass
class PriceAccumulator:
    """
    Running totals for a volume-weighted average price.

    Partial accumulators built over disjoint trade sets can be merged with
    ``combine``, which sums both totals.

    Attributes:
        total_amount: Sum of quantity * price
        total_quantity: Sum of quantity
    """

    total_amount: Decimal = Decimal(0)
    total_quantity: int = 0

    def accumulate(self, trade: Trade) -> PriceAccumulator:
        """Add one trade to the totals."""
        self.total_amount += trade.notional
        self.total_quantity += trade.quantity
        return self

    def combine(self, other: PriceAccumulator) -> PriceAccumulator:
        """Merge another partial accumulator into this one."""
        self.total_amount += other.total_amount
        self.total_quantity += other.total_quantity
        return self

    def weighted_average(self, places: int = PRICE_PLACES) -> Decimal:
        """
        Volume-weighted average price.

        Raises:
            InsufficientDataError: If no quantity has been accumulated.
        """
        if self.total_quantity == 0:
            raise InsufficientDataError("No trades available to compute a weighted price")
        return quantize(self.total_amount / self.total_quantity, places)


def accumulate_by_symbol(trades: Iterable[Trade]) -> dict[str, PriceAccumulator]:
    """
    Accumulate trades per symbol in a single pass.
    """
    accumulators: dict[str, PriceAccumulator] = {}
    for trade in trades:
        accumulators.setdefault(trade.symbol, PriceAccumulator()).accumulate(trade)
    return accumulators


def weighted_stock_price(
    trades: Iterable[Trade],
    instrument: Instrument | str,
    places: int = PRICE_PLACES,
) -> Decimal:
    """
    Calculate the volume-weighted price of one instrument.

    price = sum(quantity * price) / sum(quantity) over the instrument's trades

    Args:
        trades: Candidate trades, typically a trailing window
        instrument: Instrument (or symbol) to price
        places: Decimal places of the result

    Raises:
        InsufficientDataError: If none of the trades are for the instrument.
    """
    symbol = instrument if isinstance(instrument, str) else instrument.symbol
    accumulator = PriceAccumulator()
    for trade in trades:
        if trade.symbol == symbol:
            accumulator.accumulate(trade)
    try:
        return accumulator.weighted_average(places)
    except InsufficientDataError:
        raise InsufficientDataError(f"No trades for {symbol} in the window") from None


def _unrounded_yield(ticker: Ticker) -> Decimal:
    if not ticker.has_price:
        raise PriceUnavailableError(f"The ticker price of {ticker.symbol} is not available")
    return ticker.dividend / ticker.ticker_price


def dividend_yield(ticker: Ticker, places: int = RATIO_PLACES) -> Decimal:
    """
    Calculate the dividend yield of a ticker.

    COMMON:    last_dividend / ticker_price
    PREFERRED: fixed_dividend * par_value / ticker_price

    Raises:
        PriceUnavailableError: If the instrument has not traded yet.
    """
    return quantize(_unrounded_yield(ticker), places)


def dividend_yield_percent(ticker: Ticker, places: int = RATIO_PLACES) -> Decimal:
    """
    Dividend yield as a percentage (0.4 -> 40).

    Raises:
        PriceUnavailableError: If the instrument has not traded yet.
    """
    return quantize(_unrounded_yield(ticker) * _HUNDRED, places)


def price_earnings_ratio(ticker: Ticker, places: int = RATIO_PLACES) -> Decimal:
    """
    Calculate the P/E ratio of a ticker.

    P/E = ticker_price / EPS, with EPS approximated by the last dividend.

    Raises:
        EPSUnavailableError: If EPS is zero.
        PriceUnavailableError: If the instrument has not traded yet.
    """
    eps = ticker.earnings_per_share
    if eps <= 0:
        raise EPSUnavailableError(f"EPS of {ticker.symbol} is not available (last dividend {eps})")
    if not ticker.has_price:
        raise PriceUnavailableError(f"The ticker price of {ticker.symbol} is not available")
    return quantize(ticker.ticker_price / eps, places)


def geometric_mean(values: Iterable[Decimal], places: int = PRICE_PLACES) -> Decimal:
    """
    Calculate the geometric mean of positive values.

    mean = exp(sum(ln(v)) / n)

    Raises:
        InsufficientDataError: If there are no values.
    """
    logs = [value.ln() for value in values]
    if not logs:
        raise InsufficientDataError("Geometric mean of an empty set is undefined")
    return quantize((sum(logs, Decimal(0)) / len(logs)).exp(), places)


def all_share_index(
    trades: Iterable[Trade],
    instruments: Iterable[Instrument | str],
    places: int = PRICE_PLACES,
) -> Decimal:
    """
    Calculate the all-share index over a set of instruments.

    Each instrument is priced from the trades; instruments without trades
    are left out of the index rather than counted as zero.

    Raises:
        InsufficientDataError: If no instrument has any trades.
    """
    accumulators = accumulate_by_symbol(trades)
    prices: list[Decimal] = []
    for instrument in instruments:
        symbol = instrument if isinstance(instrument, str) else instrument.symbol
        accumulator = accumulators.get(symbol, PriceAccumulator())
        try:
            prices.append(accumulator.weighted_average(places))
        except InsufficientDataError:
            logger.debug("Excluding %s from the all-share index: no trades in window", symbol)
    if not prices:
        raise InsufficientDataError("No instrument has trades in the window, the index is undefined")
    logger.debug("All-share index over %d instruments", len(prices))
    return geometric_mean(prices, places)
