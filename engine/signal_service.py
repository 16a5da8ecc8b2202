# engine/signal_service.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, List, Optional

from config import Config
from engine.signal_engine import SignalEngine
from engine.trade_setup import build_trade_setup
from errors import CycleTimeoutError, InsufficientDataError
from indicators import (
    classify_cvd,
    classify_liquidation_bias,
    classify_price_trend,
    classify_trend,
    compute_atr,
    compute_cvd,
    estimate_whale_trend,
)
from market_data import MarketDataSource
from models import Indicators, MarketSnapshot, SignalResult, TradeSetup

logger = logging.getLogger(__name__)


def compute_indicators(snapshot: MarketSnapshot, cfg: Config) -> Indicators:
    """
    Raw snapshot -> the four labels the rule table works on.
    Short series degrade to neutral/none inside the classifiers.
    """
    oi_trend = classify_trend(snapshot.oi_series)
    liq_bias = classify_liquidation_bias(
        snapshot.liquidations.long_count,
        snapshot.liquidations.short_count,
        ratio=cfg.liq_bias_ratio,
    )
    price_trend = classify_price_trend(snapshot.candles, window=cfg.price_trend_window)
    whale_trend = estimate_whale_trend(price_trend, oi_trend, liq_bias)
    cvd_signal = classify_cvd(compute_cvd(snapshot.trades))

    logger.debug(
        "indicators %s: price=%s oi=%s whale=%s cvd=%s liq=%s",
        snapshot.symbol, price_trend, oi_trend, whale_trend, cvd_signal, liq_bias,
    )
    return Indicators(
        whale_trend=whale_trend,
        oi_trend=oi_trend,
        cvd_signal=cvd_signal,
        liquidation_bias=liq_bias,
    )


async def gather_all(calls: List[Awaitable[Any]], timeout: float) -> List[Any]:
    """
    Runs the calls concurrently and waits for all of them.
    The first failure (or the timeout) cancels whatever is still running.
    """
    tasks = [asyncio.ensure_future(c) for c in calls]
    try:
        return await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


class SignalService:
    """
    One instrument, one exchange. Every public call fetches a fresh
    snapshot; nothing is carried from one call to the next.
    """

    def __init__(self, source: MarketDataSource, cfg: Config, engine: Optional[SignalEngine] = None):
        self.source = source
        self.cfg = cfg
        self.engine = engine or SignalEngine()

    async def fetch_snapshot(self) -> MarketSnapshot:
        cfg = self.cfg
        calls = [
            self.source.fetch_open_interest_series(cfg.oi_timeframe, cfg.oi_lookback),
            self.source.fetch_recent_candles(cfg.timeframe, cfg.candle_lookback),
            self.source.fetch_filled_liquidations(cfg.liq_lookback),
            self.source.fetch_recent_trades(cfg.trade_lookback),
            self.source.fetch_last_price(),
        ]
        try:
            oi_series, candles, liquidations, trades, price = await gather_all(
                calls, timeout=cfg.cycle_timeout_sec
            )
        except asyncio.TimeoutError as e:
            raise CycleTimeoutError(cfg.symbol, cfg.cycle_timeout_sec) from e

        return MarketSnapshot(
            symbol=cfg.symbol,
            oi_series=oi_series,
            candles=candles,
            liquidations=liquidations,
            trades=trades,
            last_price=price,
        )

    def decide(self, snapshot: MarketSnapshot) -> SignalResult:
        return self.engine.decide(compute_indicators(snapshot, self.cfg))

    def setup_from_snapshot(self, snapshot: MarketSnapshot) -> TradeSetup:
        result = self.decide(snapshot)
        if result.signal == "WAIT":
            return build_trade_setup(result, snapshot.last_price, None)

        try:
            atr: Optional[float] = compute_atr(snapshot.candles)
        except InsufficientDataError as e:
            logger.warning("⚠️ %s: ATR unavailable, no bracket: %s", snapshot.symbol, e)
            atr = None

        return build_trade_setup(
            result,
            entry=snapshot.last_price,
            atr=atr,
            atr_multiplier=self.cfg.atr_multiplier,
            reward_risk_ratio=self.cfg.reward_risk_ratio,
        )

    async def evaluate_signal(self) -> SignalResult:
        return self.decide(await self.fetch_snapshot())

    async def build_trade_setup(self) -> TradeSetup:
        return self.setup_from_snapshot(await self.fetch_snapshot())
