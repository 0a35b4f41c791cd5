"""
tests/unit/metrics/test_snapshot.py

Tests for MarketSnapshot built by StockExchange.snapshot().
"""

from decimal import Decimal

import pytest

from simplestocks.core.trade import Trade
from simplestocks.data_types import DividendClass
from tests.conftest import ALE, GIN, NOW, POP, TEA, minutes_ago


@pytest.fixture
def snapshot(exchange):
    exchange.record_trade(Trade.buy(TEA, 1, 10, timestamp=minutes_ago(2)))
    exchange.record_trade(Trade.buy(ALE, 1, 5, timestamp=minutes_ago(1)))
    exchange.record_trade(Trade.buy(POP, 1, 20, timestamp=minutes_ago(30)))
    exchange.record_trade(Trade.sell(GIN, 1, 20, timestamp=minutes_ago(1)))
    exchange.record_trade(Trade.buy(GIN, 3, 20, timestamp=NOW))
    return exchange.snapshot()


class TestMarketSnapshot:
    def test_header(self, snapshot):
        assert snapshot.as_of == NOW
        assert snapshot.window_minutes == 15

    def test_instruments_in_registration_order(self, snapshot):
        assert [m.symbol for m in snapshot.instruments] == ["TEA", "POP", "ALE", "GIN", "JOE"]

    def test_index_matches_exchange(self, snapshot, exchange):
        assert snapshot.all_share_index == exchange.all_share_index()
        assert snapshot.all_share_index == Decimal("10.00")  # cube root of 10 * 5 * 20

    def test_missing_metrics_are_none(self, snapshot):
        joe = snapshot.get("JOE")
        assert joe.stock_price is None
        assert joe.dividend_yield is None
        assert joe.pe_ratio is None
        assert joe.trade_count == 0

    def test_zero_eps_gives_no_pe(self, snapshot):
        tea = snapshot.get("TEA")
        assert tea.stock_price == Decimal("10.00")
        assert tea.dividend_yield == 0
        assert tea.pe_ratio is None

    def test_stale_trade_keeps_yield_but_not_price(self, snapshot):
        pop = snapshot.get("POP")
        assert pop.stock_price is None
        assert pop.dividend_yield == Decimal("0.4")
        assert pop.pe_ratio == Decimal("2.5")

    def test_preferred(self, snapshot):
        gin = snapshot.get("GIN")
        assert gin.dividend_class == DividendClass.PREFERRED
        assert gin.dividend_yield == Decimal("0.1")
        assert gin.trade_count == 2

    def test_get_missing(self, snapshot):
        with pytest.raises(KeyError):
            snapshot.get("XYZ")

    def test_str(self, snapshot):
        text = str(snapshot)
        assert "all_share_index" in text
        assert "GIN" in text
        assert "n/a" in text

    def test_to_dataframe(self, snapshot):
        df = snapshot.to_dataframe()
        assert list(df.index) == ["TEA", "POP", "ALE", "GIN", "JOE"]
        assert df.loc["ALE", "stock_price"] == Decimal("5.00")
        assert df.loc["GIN", "trade_count"] == 2

    def test_taken_inside_frozen_ledger(self, exchange):
        exchange.record_trade(Trade.buy(POP, 1, 20, timestamp=NOW))
        with exchange.ledger.frozen():
            snap = exchange.snapshot()
        pop = snap.get("POP")
        assert pop.stock_price == Decimal("20.00")
        assert pop.pe_ratio == Decimal("2.5")

    def test_empty_exchange(self, exchange):
        snap = exchange.snapshot()
        assert snap.all_share_index is None
        assert all(m.stock_price is None for m in snap.instruments)
