# market_data.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Dict, List, Protocol, Sequence, TypeVar

import ccxt
import ccxt.async_support as ccxt_async

from errors import UpstreamFetchError
from indicators import count_liquidations, normalize_trades
from models import Candle, LiquidationCount, Trade
from utils.timeframes import tf_seconds, ts_close_from_open

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MarketDataSource(Protocol):
    """
    What the signal service needs from an exchange.
    Every list comes back chronological (oldest first).
    """
    symbol: str

    async def fetch_open_interest_series(self, timeframe: str, limit: int) -> List[float]:
        ...

    async def fetch_recent_candles(self, timeframe: str, limit: int) -> List[Candle]:
        ...

    async def fetch_filled_liquidations(self, lookback: int) -> LiquidationCount:
        ...

    async def fetch_recent_trades(self, limit: int) -> List[Trade]:
        ...

    async def fetch_last_price(self) -> float:
        ...


async def make_exchange(exchange_id: str) -> ccxt_async.Exchange:
    exchange_class = getattr(ccxt_async, exchange_id)
    exchange = exchange_class(
        {
            "enableRateLimit": True,
            "options": {"defaultType": "swap"},
        }
    )
    try:
        await exchange.load_markets()
    except Exception:
        await exchange.close()
        raise
    return exchange


def normalize_candles(
    symbol: str,
    timeframe: str,
    rows: Sequence[Sequence[Any]],
    drop_forming: bool = True,
) -> List[Candle]:
    """
    Raw OHLCV rows in any order -> chronological closed candles.
    The newest row is the still-forming candle and is dropped unless told otherwise.
    """
    timeframe_sec = tf_seconds(timeframe)
    try:
        ordered = sorted(rows, key=lambda r: int(r[0]))
        if drop_forming:
            ordered = ordered[:-1]

        candles: List[Candle] = []
        for row in ordered:
            t_open_ms, o, h, l, c, *_ = row
            candles.append(
                Candle(
                    symbol=symbol,
                    timeframe=timeframe,
                    t_close_ms=ts_close_from_open(int(t_open_ms), timeframe_sec),
                    o=float(o),
                    h=float(h),
                    l=float(l),
                    c=float(c),
                )
            )
    except (TypeError, ValueError) as e:
        raise UpstreamFetchError("candles", symbol, f"malformed OHLCV row: {e}") from e
    return candles


class MarketDataClient:
    """
    MarketDataSource on top of a ccxt async exchange.
    Any exchange failure or unusable payload becomes UpstreamFetchError
    tagged with the fetch name and the instrument.
    """

    def __init__(self, exchange: ccxt_async.Exchange, symbol: str):
        self.exchange = exchange
        self.symbol = symbol

    async def _call(self, source: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except ccxt.BaseError as e:
            raise UpstreamFetchError(source, self.symbol, f"{type(e).__name__}: {e}") from e

    async def fetch_open_interest_series(self, timeframe: str, limit: int) -> List[float]:
        rows = await self._call(
            "open_interest",
            self.exchange.fetch_open_interest_history(self.symbol, timeframe, limit=limit),
        )
        if not rows:
            raise UpstreamFetchError("open_interest", self.symbol, "empty open interest history")

        series: List[float] = []
        for row in sorted(rows, key=lambda r: r.get("timestamp") or 0)[-limit:]:
            value = row.get("openInterestAmount")
            if value is None:
                value = row.get("openInterestValue")
            if value is None:
                raise UpstreamFetchError("open_interest", self.symbol, f"no OI value in {row!r}")
            try:
                series.append(float(value))
            except (TypeError, ValueError) as e:
                raise UpstreamFetchError("open_interest", self.symbol, f"bad OI value {value!r}") from e
        return series

    async def fetch_recent_candles(self, timeframe: str, limit: int) -> List[Candle]:
        # +1 for the forming candle that normalize_candles drops
        rows = await self._call(
            "candles",
            self.exchange.fetch_ohlcv(self.symbol, timeframe=timeframe, limit=limit + 1),
        )
        candles = normalize_candles(self.symbol, timeframe, rows or [])[-limit:]
        if len(candles) < 2:
            raise UpstreamFetchError(
                "candles", self.symbol, f"need at least 2 closed candles, got {len(candles)}"
            )
        return candles

    def _underlying(self) -> str:
        market = self.exchange.market(self.symbol)
        info: Dict[str, Any] = market.get("info") or {}
        return info.get("uly") or info.get("instFamily") or f"{market['base']}-{market['quote']}"

    async def fetch_filled_liquidations(self, lookback: int) -> LiquidationCount:
        if self.exchange.id != "okx":
            raise UpstreamFetchError(
                "liquidations", self.symbol, f"no filled-liquidation feed for {self.exchange.id}"
            )
        try:
            uly = self._underlying()
        except ccxt.BaseError as e:
            raise UpstreamFetchError("liquidations", self.symbol, f"{type(e).__name__}: {e}") from e
        params = {
            "instType": "SWAP",
            "uly": uly,
            "state": "filled",
            "limit": str(lookback),
        }
        payload = await self._call(
            "liquidations",
            self.exchange.public_get_public_liquidation_orders(params),
        )
        if not isinstance(payload, dict) or str(payload.get("code", "0")) != "0":
            raise UpstreamFetchError("liquidations", self.symbol, f"bad payload: {payload!r}")
        return count_liquidations(payload.get("data") or [], lookback=lookback)

    async def fetch_recent_trades(self, limit: int) -> List[Trade]:
        rows = await self._call("trades", self.exchange.fetch_trades(self.symbol, limit=limit))
        try:
            return normalize_trades(rows or [])
        except (TypeError, ValueError) as e:
            raise UpstreamFetchError("trades", self.symbol, f"malformed trade row: {e}") from e

    async def fetch_last_price(self) -> float:
        ticker = await self._call("ticker", self.exchange.fetch_ticker(self.symbol))
        price = ticker.get("last") or ticker.get("close")
        if price is None:
            raise UpstreamFetchError("ticker", self.symbol, "ticker has no last price")
        try:
            return float(price)
        except (TypeError, ValueError) as e:
            raise UpstreamFetchError("ticker", self.symbol, f"bad last price {price!r}") from e
