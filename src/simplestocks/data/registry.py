"""
src/simplestocks/data/registry.py

InstrumentRegistry, the set of instruments tradeable on the exchange.

Maps each symbol to the ticker holding its dividend terms and last price.
Provides lookup, last-price updates, and factories that build a registry
from catalog records or a catalog CSV file.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from simplestocks.data.instrument import DividendTerms, Instrument, Ticker
from simplestocks.utils.exceptions import DuplicateInstrumentError, InstrumentNotFoundError, ValidationError
from simplestocks.utils.logger import get_logger
from simplestocks.utils.numeric import Number

logger = get_logger(__name__)

CATALOG_COLUMNS = ("symbol", "dividend_class", "last_dividend", "fixed_dividend", "par_value")


def _symbol_of(instrument: Instrument | str) -> str:
    return instrument if isinstance(instrument, str) else instrument.symbol


class InstrumentRegistry:
    """
    Registry of tickers keyed by instrument symbol.

    Registration order is preserved, so iteration and ``symbols`` are
    deterministic. A symbol can be registered only once; the second attempt
    is rejected and leaves the first entry untouched.

    Example:
        >>> registry = InstrumentRegistry()
        >>> ticker = registry.register(Common("POP"), DividendTerms(last_dividend=8, par_value=100))
        >>> registry.lookup("POP").dividend
        Decimal('8')
    """

    ## Magic methods

    def __init__(self) -> None:
        self._tickers: dict[str, Ticker] = {}
        self._lock = threading.Lock()

    def __contains__(self, instrument: Instrument | str) -> bool:
        """Check whether an instrument (or symbol) is registered."""
        return _symbol_of(instrument) in self._tickers

    def __len__(self) -> int:
        return len(self._tickers)

    def __iter__(self) -> Iterator[Ticker]:
        """Iterate tickers in registration order."""
        return iter(list(self._tickers.values()))

    def __repr__(self) -> str:
        return f"InstrumentRegistry(symbols={self.symbols})"

    ## Properties

    @property
    def symbols(self) -> list[str]:
        """Return list of registered symbols in registration order."""
        return list(self._tickers.keys())

    @property
    def instruments(self) -> list[Instrument]:
        return [ticker.instrument for ticker in self._tickers.values()]

    ## Public methods

    def register(self, instrument: Instrument, terms: DividendTerms) -> Ticker:
        """
        Register an instrument with its dividend terms.

        Args:
            instrument: The instrument to register
            terms: Last dividend, par value, and (preferred only) fixed dividend

        Returns:
            The newly created ticker.

        Raises:
            DuplicateInstrumentError: If the symbol is already registered.
            ValidationError: If the dividend terms are invalid.
        """
        if not isinstance(instrument, Instrument):
            raise ValidationError(f"expected an Instrument, got {instrument!r}")
        ticker = Ticker.from_terms(instrument, terms)
        with self._lock:
            if instrument.symbol in self._tickers:
                raise DuplicateInstrumentError(instrument.symbol)
            self._tickers[instrument.symbol] = ticker
        logger.info("Registered %s (%s)", instrument.symbol, instrument.dividend_class)
        return ticker

    def lookup(self, instrument: Instrument | str) -> Ticker:
        """
        Look up the ticker of an instrument or symbol.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
        """
        symbol = _symbol_of(instrument)
        try:
            return self._tickers[symbol]
        except KeyError:
            raise InstrumentNotFoundError(symbol) from None

    def set_last_price(self, instrument: Instrument | str, price: Number) -> None:
        """
        Overwrite the last traded price of an instrument.

        Raises:
            InstrumentNotFoundError: If the instrument is not registered.
            ValidationError: If the price is not positive.
        """
        self.lookup(instrument).ticker_price = price

    ## Factories

    @classmethod
    def from_catalog(cls, records: Iterable[Mapping[str, Any]]) -> InstrumentRegistry:
        """
        Build a registry from catalog records.

        Each record needs ``symbol``, ``dividend_class``, ``last_dividend`` and
        ``par_value``; preferred stocks also need ``fixed_dividend``. Missing
        or blank ``fixed_dividend`` values are treated as absent.
        """
        registry = cls()
        for record in records:
            fixed = record.get("fixed_dividend")
            if fixed is not None and (pd.isna(fixed) or fixed == ""):
                fixed = None
            registry.register(
                Instrument(
                    symbol=str(record["symbol"]).strip(),
                    dividend_class=str(record.get("dividend_class", "COMMON")).strip().upper(),
                ),
                DividendTerms(
                    last_dividend=record["last_dividend"],
                    par_value=record["par_value"],
                    fixed_dividend=fixed,
                ),
            )
        return registry


def load_catalog(path: Path | str) -> InstrumentRegistry:
    """
    Load a registry from a catalog CSV file.

    Expected columns: symbol, dividend_class, last_dividend, fixed_dividend, par_value.
    Numeric columns are read as strings so figures keep their exact decimal value.

    Raises:
        ValidationError: If a required column is missing.
    """
    path = Path(path)
    logger.debug("Loading instrument catalog from %s", path)
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]
    missing = [c for c in CATALOG_COLUMNS if c != "fixed_dividend" and c not in df.columns]
    if missing:
        raise ValidationError(f"catalog {path.name} is missing columns: {missing}")
    registry = InstrumentRegistry.from_catalog(df.to_dict(orient="records"))
    logger.debug("Loaded %d instruments from %s", len(registry), path.name)
    return registry
