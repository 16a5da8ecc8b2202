import asyncio
from typing import List, Optional, Sequence

import pytest

from config import Config
from models import Candle, LiquidationCount, MarketSnapshot, Trade


def make_candles(closes: Sequence[float], spread: float = 0.05, symbol: str = "SUI/USDT:USDT") -> List[Candle]:
    return [
        Candle(
            symbol=symbol,
            timeframe="15m",
            t_close_ms=1_700_000_000_000 + i * 900_000,
            o=c,
            h=c + spread,
            l=c - spread,
            c=c,
        )
        for i, c in enumerate(closes)
    ]


def make_trades(*pairs) -> List[Trade]:
    return [Trade(size=size, side=side, ts_ms=i) for i, (size, side) in enumerate(pairs)]


class FakeSource:
    """In-memory MarketDataSource; set `fail` / `delay` per fetch name to misbehave."""

    def __init__(
        self,
        oi: Sequence[float] = (100.0, 110.0),
        candles: Optional[List[Candle]] = None,
        liquidations: LiquidationCount = LiquidationCount(long_count=10, short_count=40),
        trades: Optional[List[Trade]] = None,
        price: float = 2.0,
    ):
        self.symbol = "SUI/USDT:USDT"
        self.oi = list(oi)
        self.candles = candles if candles is not None else make_candles([1.90, 1.92, 1.95, 1.97, 2.00])
        self.liquidations = liquidations
        self.trades = trades if trades is not None else make_trades((5.0, "sell"), (8.0, "buy"))
        self.price = price
        self.fail = {}
        self.delay = {}
        self.calls = []
        self.cancelled = []

    async def _serve(self, name, value):
        self.calls.append(name)
        try:
            if name in self.delay:
                await asyncio.sleep(self.delay[name])
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise
        if name in self.fail:
            raise self.fail[name]
        return value

    async def fetch_open_interest_series(self, timeframe, limit):
        return await self._serve("open_interest", self.oi[-limit:])

    async def fetch_recent_candles(self, timeframe, limit):
        return await self._serve("candles", self.candles[-limit:])

    async def fetch_filled_liquidations(self, lookback):
        return await self._serve("liquidations", self.liquidations)

    async def fetch_recent_trades(self, limit):
        return await self._serve("trades", self.trades[-limit:])

    async def fetch_last_price(self):
        return await self._serve("ticker", self.price)


@pytest.fixture
def cfg() -> Config:
    return Config(cycle_timeout_sec=1.0, tg_token="", tg_chat_id="", log_file="")


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def long_snapshot() -> MarketSnapshot:
    return MarketSnapshot(
        symbol="SUI/USDT:USDT",
        oi_series=[100.0, 110.0],
        candles=make_candles([1.90, 1.92, 1.95, 1.97, 2.00]),
        liquidations=LiquidationCount(long_count=10, short_count=40),
        trades=make_trades((5.0, "sell"), (8.0, "buy")),
        last_price=2.0,
    )
