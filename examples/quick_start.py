"""
examples/quick_start.py

Quick start: load the sample catalog, record a few trades, print metrics.

Run with:
    uv run python examples/quick_start.py
"""

from datetime import timedelta
from pathlib import Path

from tabulate import tabulate

from simplestocks import InsufficientDataError, StockExchange, Trade, get_logger, utc_now

logger = get_logger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def main() -> None:
    ## 1. Register the catalog
    exchange = StockExchange.from_catalog_csv(DATA_DIR / "gbce_catalog.csv")
    logger.info("Registered %s", exchange.registry.symbols)

    ## 2. Record trades over the last few minutes
    now = utc_now()
    tea, pop, ale, gin = (exchange.registry.lookup(s).instrument for s in ("TEA", "POP", "ALE", "GIN"))
    trades = [
        Trade.buy(pop, 100, "19.00", timestamp=now - timedelta(minutes=20)),
        Trade.buy(tea, 1, "10.00", timestamp=now - timedelta(minutes=9)),
        Trade.sell(tea, 3, "8.00", timestamp=now - timedelta(minutes=7)),
        Trade.buy(ale, 6, "5.00", timestamp=now - timedelta(minutes=4)),
        Trade.sell(ale, 2, "3.00", timestamp=now - timedelta(minutes=3)),
        Trade.buy(gin, 10, "20.00", timestamp=now - timedelta(minutes=1)),
    ]
    for trade in trades:
        exchange.record_trade(trade)
    logger.info("Recorded %d trades, %d inside the window", len(exchange.ledger), len(exchange.latest_trades()))

    ## 3. Per-instrument metrics
    try:
        logger.info("TEA stock price: %s", exchange.stock_price(tea))
    except InsufficientDataError as exc:
        logger.info("TEA has no price: %s", exc)
    logger.info("All-share index: %s", exchange.all_share_index())

    snapshot = exchange.snapshot()
    logger.info(snapshot)

    df = snapshot.to_dataframe().reset_index()
    bold_headers = [f"\033[1m{c}\033[0m" for c in df.columns]
    logger.info(
        "Market summary:\n%s",
        tabulate(df.fillna("n/a").values, headers=bold_headers, tablefmt="rounded_grid"),
    )

    logger.info("Ledger:\n%s", exchange.ledger.to_dataframe().to_string(index=False))


if __name__ == "__main__":
    main()
