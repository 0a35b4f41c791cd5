"""
src/simplestocks/exchange.py

StockExchange, the public entry point of the engine.

Registers instruments, records trades, and answers metric queries over a
trailing window of recent trades anchored at the exchange clock.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from simplestocks.config import settings
from simplestocks.core.ledger import TradeLedger
from simplestocks.core.trade import Trade, utc_now
from simplestocks.data.instrument import DividendTerms, Instrument, Ticker
from simplestocks.data.registry import InstrumentRegistry, load_catalog
from simplestocks.metrics import market
from simplestocks.metrics.snapshot import InstrumentMetrics, MarketSnapshot
from simplestocks.utils.exceptions import (
    EPSUnavailableError,
    InsufficientDataError,
    PriceUnavailableError,
    ValidationError,
)
from simplestocks.utils.logger import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class StockExchange:
    """
    In-memory exchange: instrument registry, trade ledger, and metrics.

    Every metric is recomputed from the current registry and ledger on each
    call. Window-based metrics default to the last ``window_minutes``
    minutes before ``clock()``; pass ``as_of`` to anchor them elsewhere.

    Example:
        >>> exchange = StockExchange()
        >>> ticker = exchange.register_instrument(Common("TEA"), DividendTerms(0, 100))
        >>> exchange.record_trade(Trade.buy(Common("TEA"), 10, "101.50"))
        >>> exchange.stock_price("TEA")
        Decimal('101.50')
    """

    ## Magic methods

    def __init__(
        self,
        registry: InstrumentRegistry | None = None,
        *,
        clock: Clock = utc_now,
        window_minutes: int = settings.EXCHANGE_WINDOW_MINUTES,
        price_places: int = settings.EXCHANGE_PRICE_PLACES,
        ratio_places: int = settings.EXCHANGE_RATIO_PLACES,
    ) -> None:
        """
        Args:
            registry: Pre-populated registry, or None for an empty one
            clock: Returns the current timezone-aware instant
            window_minutes: Default trailing window for prices and the index
            price_places: Decimal places of prices and the index
            ratio_places: Decimal places of yields and P/E ratios
        """
        if isinstance(window_minutes, bool) or not isinstance(window_minutes, int) or window_minutes < 1:
            raise ValidationError(f"window_minutes must be a positive integer, got {window_minutes!r}")
        self.registry = registry if registry is not None else InstrumentRegistry()
        self.ledger = TradeLedger(self.registry)
        self.clock = clock
        self.window_minutes = window_minutes
        self.price_places = price_places
        self.ratio_places = ratio_places

    def __repr__(self) -> str:
        return (
            f"StockExchange(instruments={len(self.registry)}, trades={len(self.ledger)}, "
            f"window_minutes={self.window_minutes})"
        )

    ## Factories

    @classmethod
    def from_catalog(cls, records: Iterable[Mapping[str, Any]], **kwargs: Any) -> StockExchange:
        """Create an exchange with every catalog record registered."""
        return cls(InstrumentRegistry.from_catalog(records), **kwargs)

    @classmethod
    def from_catalog_csv(cls, path: Path | str, **kwargs: Any) -> StockExchange:
        """Create an exchange from a catalog CSV file (see ``load_catalog``)."""
        return cls(load_catalog(path), **kwargs)

    ## Registration and trades

    def register_instrument(self, instrument: Instrument, terms: DividendTerms) -> Ticker:
        """
        Register an instrument with its dividend terms.

        Raises:
            DuplicateInstrumentError: If the instrument is already registered.
            ValidationError: If the dividend terms are invalid.
        """
        return self.registry.register(instrument, terms)

    def record_trade(self, trade: Trade) -> None:
        """
        Record a trade and update the instrument's ticker price.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
        """
        self.ledger.record(trade)

    def latest_trades(self, minutes: int | None = None, as_of: datetime | None = None) -> list[Trade]:
        """
        Trades newer than ``as_of`` minus ``minutes`` (defaults: clock and window).

        Raises:
            ValidationError: If ``minutes`` is not positive.
        """
        return self.ledger.windowed(
            as_of if as_of is not None else self.clock(),
            minutes if minutes is not None else self.window_minutes,
        )

    ## Metrics

    def stock_price(self, instrument: Instrument | str, as_of: datetime | None = None) -> Decimal:
        """
        Volume-weighted price of an instrument over the trailing window.

        Raises:
            InsufficientDataError: If the instrument has no trades in the window.
        """
        return market.weighted_stock_price(self.latest_trades(as_of=as_of), instrument, self.price_places)

    def dividend_yield(self, instrument: Instrument | str) -> Decimal:
        """
        Dividend yield at the last traded price.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
            PriceUnavailableError: If the instrument has not traded yet.
        """
        return market.dividend_yield(self.registry.lookup(instrument), self.ratio_places)

    def dividend_yield_percent(self, instrument: Instrument | str) -> Decimal:
        """
        Dividend yield as a percentage.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
            PriceUnavailableError: If the instrument has not traded yet.
        """
        return market.dividend_yield_percent(self.registry.lookup(instrument), self.ratio_places)

    def price_earnings_ratio(self, instrument: Instrument | str) -> Decimal:
        """
        Price/earnings ratio at the last traded price.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
            EPSUnavailableError: If the last dividend is zero.
            PriceUnavailableError: If the instrument has not traded yet.
        """
        return market.price_earnings_ratio(self.registry.lookup(instrument), self.ratio_places)

    def all_share_index(self, as_of: datetime | None = None) -> Decimal:
        """
        Geometric mean of the weighted prices of all instruments with trades in the window.

        Raises:
            InsufficientDataError: If no registered instrument has trades in the window.
        """
        trades = self.latest_trades(as_of=as_of)
        try:
            return market.all_share_index(trades, self.registry.symbols, self.price_places)
        except InsufficientDataError:
            logger.warning("All-share index requested with no trades in the last %d minutes", self.window_minutes)
            raise

    def snapshot(self, as_of: datetime | None = None) -> MarketSnapshot:
        """
        Compute every metric for every instrument from one window read.

        Unavailable metrics are reported as None. Trade recording is held off
        while the snapshot is computed, so yields and P/E ratios use the
        ticker prices left by exactly the trades the window was read from.
        """
        as_of = as_of if as_of is not None else self.clock()
        rows: list[InstrumentMetrics] = []
        prices: list[Decimal] = []
        with self.ledger.frozen():
            trades = self.latest_trades(as_of=as_of)
            accumulators = market.accumulate_by_symbol(trades)
            counts: dict[str, int] = {}
            for trade in trades:
                counts[trade.symbol] = counts.get(trade.symbol, 0) + 1

            for ticker in self.registry:
                price = yield_ = pe = None
                accumulator = accumulators.get(ticker.symbol)
                if accumulator is not None:
                    price = accumulator.weighted_average(self.price_places)
                    prices.append(price)
                try:
                    yield_ = market.dividend_yield(ticker, self.ratio_places)
                except PriceUnavailableError:
                    logger.debug("No dividend yield for %s: never traded", ticker.symbol)
                try:
                    pe = market.price_earnings_ratio(ticker, self.ratio_places)
                except (EPSUnavailableError, PriceUnavailableError) as exc:
                    logger.debug("No P/E ratio for %s: %s", ticker.symbol, exc)
                rows.append(
                    InstrumentMetrics(
                        symbol=ticker.symbol,
                        dividend_class=ticker.instrument.dividend_class,
                        stock_price=price,
                        dividend_yield=yield_,
                        pe_ratio=pe,
                        trade_count=counts.get(ticker.symbol, 0),
                    )
                )

        index = market.geometric_mean(prices, self.price_places) if prices else None
        return MarketSnapshot(
            as_of=as_of,
            window_minutes=self.window_minutes,
            instruments=rows,
            all_share_index=index,
        )
