"""
tests/unit/data/test_registry.py

Tests for InstrumentRegistry and catalog loading.
"""

from decimal import Decimal

import pytest

from simplestocks.data.instrument import Common, Preferred
from simplestocks.data.registry import InstrumentRegistry, load_catalog
from simplestocks.data_types import DividendClass
from simplestocks.utils.exceptions import (
    DuplicateInstrumentError,
    InstrumentNotFoundError,
    ValidationError,
)
from tests.conftest import CATALOG, make_terms


class TestRegister:
    def test_register_returns_ticker(self):
        registry = InstrumentRegistry()
        ticker = registry.register(Common("POP"), make_terms(8, 100))
        assert ticker.symbol == "POP"
        assert registry.lookup("POP") is ticker

    def test_duplicate_rejected(self):
        registry = InstrumentRegistry()
        first = registry.register(Common("TEA"), make_terms(0, 100))
        with pytest.raises(DuplicateInstrumentError):
            registry.register(Common("TEA"), make_terms(1, 1))
        assert registry.lookup("TEA") is first
        assert first.last_dividend == 0
        assert first.par_value == 100

    def test_duplicate_by_symbol_regardless_of_class(self):
        registry = InstrumentRegistry()
        registry.register(Common("GIN"), make_terms())
        with pytest.raises(DuplicateInstrumentError):
            registry.register(Preferred("GIN"), make_terms(fixed_dividend="0.02"))

    def test_invalid_terms_leave_no_entry(self):
        registry = InstrumentRegistry()
        with pytest.raises(ValidationError):
            registry.register(Common("POP"), make_terms(last_dividend=-1))
        assert "POP" not in registry
        assert len(registry) == 0

    def test_preferred_without_fixed_dividend(self):
        registry = InstrumentRegistry()
        with pytest.raises(ValidationError):
            registry.register(Preferred("GIN"), make_terms())

    def test_rejects_non_instrument(self):
        with pytest.raises(ValidationError):
            InstrumentRegistry().register("POP", make_terms())


class TestLookup:
    def test_lookup_by_instrument_or_symbol(self, registry):
        assert registry.lookup(Common("POP")) is registry.lookup("POP")

    def test_lookup_missing(self, registry):
        with pytest.raises(InstrumentNotFoundError) as excinfo:
            registry.lookup("XYZ")
        assert str(excinfo.value) == "Instrument XYZ has not been registered"

    def test_not_found_is_a_key_error(self, registry):
        with pytest.raises(KeyError):
            registry.lookup("XYZ")


class TestSetLastPrice:
    def test_overwrites_price(self, registry):
        registry.set_last_price("POP", 20)
        registry.set_last_price(Common("POP"), "21.5")
        assert registry.lookup("POP").ticker_price == Decimal("21.5")

    def test_unregistered(self, registry):
        with pytest.raises(InstrumentNotFoundError):
            registry.set_last_price("XYZ", 20)

    @pytest.mark.parametrize("price", [0, -5])
    def test_non_positive(self, registry, price):
        with pytest.raises(ValidationError):
            registry.set_last_price("POP", price)
        assert not registry.lookup("POP").has_price


class TestContainer:
    def test_symbols_in_registration_order(self, registry):
        assert registry.symbols == ["TEA", "POP", "ALE", "GIN", "JOE"]

    def test_contains(self, registry):
        assert "GIN" in registry
        assert Common("TEA") in registry
        assert "XYZ" not in registry

    def test_len(self, registry):
        assert len(registry) == 5

    def test_iter_yields_tickers(self, registry):
        assert [t.symbol for t in registry] == registry.symbols

    def test_instruments(self, registry):
        assert registry.instruments[3] == Preferred("GIN")

    def test_empty(self):
        registry = InstrumentRegistry()
        assert len(registry) == 0
        assert registry.symbols == []

    def test_repr(self, registry):
        assert "GIN" in repr(registry)


class TestCatalog:
    def test_from_catalog(self):
        registry = InstrumentRegistry.from_catalog(CATALOG)
        gin = registry.lookup("GIN")
        assert gin.instrument.dividend_class == DividendClass.PREFERRED
        assert gin.fixed_dividend == Decimal("0.02")
        assert registry.lookup("TEA").fixed_dividend is None

    def test_from_catalog_duplicate(self):
        with pytest.raises(DuplicateInstrumentError):
            InstrumentRegistry.from_catalog([CATALOG[0], CATALOG[0]])

    def test_load_catalog_csv(self, catalog_csv_path):
        registry = load_catalog(catalog_csv_path)
        assert registry.symbols == ["TEA", "POP", "ALE", "GIN", "JOE"]
        assert registry.lookup("GIN").dividend == Decimal("2.00")
        assert registry.lookup("ALE").par_value == 60
        assert registry.lookup("JOE").fixed_dividend is None

    def test_load_catalog_missing_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("symbol,last_dividend\nTEA,0\n")
        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_load_catalog_without_fixed_dividend_column(self, tmp_path):
        path = tmp_path / "common.csv"
        path.write_text("symbol,dividend_class,last_dividend,par_value\nTEA,common,0,100\n")
        registry = load_catalog(path)
        assert registry.lookup("TEA").instrument.dividend_class == DividendClass.COMMON
