# indicators/whale.py
from typing import Sequence

from models import Candle, LiquidationBias, PriceTrend, Trend

DEFAULT_PRICE_WINDOW = 5


def classify_price_trend(candles: Sequence[Candle], window: int = DEFAULT_PRICE_WINDOW) -> PriceTrend:
    """
    Compares the close of the earliest and the latest of the last `window`
    candles. Candles must be chronological.
    """
    recent = list(candles)[-window:]
    if len(recent) < 2:
        return "flat"
    first_close = recent[0].c
    last_close = recent[-1].c
    if last_close > first_close:
        return "up"
    if last_close < first_close:
        return "down"
    return "flat"


def estimate_whale_trend(
    price_trend: PriceTrend,
    oi_trend: Trend,
    liquidation_bias: LiquidationBias,
) -> Trend:
    """
    Large-participant footprint from three conditions, all of which must hold:
      - accumulation: price up, OI increasing, shorts liquidated -> increasing
      - distribution: price down, OI increasing, longs liquidated -> decreasing
    Anything else is neutral.
    """
    if price_trend == "up" and oi_trend == "increasing" and liquidation_bias == "short_liq":
        return "increasing"
    if price_trend == "down" and oi_trend == "increasing" and liquidation_bias == "long_liq":
        return "decreasing"
    return "neutral"
