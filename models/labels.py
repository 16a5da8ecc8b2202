# models/labels.py
from typing import Literal

Trend = Literal["increasing", "decreasing", "neutral"]
CvdSignal = Literal["bullish", "bearish", "neutral"]
LiquidationBias = Literal["long_liq", "short_liq", "none"]
PriceTrend = Literal["up", "down", "flat"]
SignalSide = Literal["LONG", "SHORT", "WAIT"]
TradeSide = Literal["buy", "sell"]
