from dataclasses import dataclass, field
from typing import List

from models.labels import CvdSignal, LiquidationBias, PriceTrend, SignalSide, TradeSide, Trend
from models.signal_models import SignalResult, TradeSetup


@dataclass
class Candle:
    """
    Closed candle for one time bucket.
    Lists of candles are always chronological (oldest first) once they
    leave the fetch layer.
    """
    symbol: str
    timeframe: str
    t_close_ms: int
    o: float
    h: float
    l: float
    c: float


@dataclass(frozen=True)
class Trade:
    size: float
    side: TradeSide
    ts_ms: int = 0


@dataclass(frozen=True)
class LiquidationCount:
    """
    Aggregate of filled liquidations over the lookback window.
    long_count: long positions force-closed, short_count: shorts force-closed.
    """
    long_count: int
    short_count: int


@dataclass(frozen=True)
class Indicators:
    whale_trend: Trend
    oi_trend: Trend
    cvd_signal: CvdSignal
    liquidation_bias: LiquidationBias


@dataclass
class MarketSnapshot:
    """
    Everything fetched for one evaluation cycle.
    Built fresh on every tick and thrown away afterwards.
    """
    symbol: str
    oi_series: List[float]
    candles: List[Candle]
    liquidations: LiquidationCount
    trades: List[Trade] = field(default_factory=list)
    last_price: float = 0.0


__all__ = [
    "Candle",
    "CvdSignal",
    "Indicators",
    "LiquidationBias",
    "LiquidationCount",
    "MarketSnapshot",
    "PriceTrend",
    "SignalResult",
    "SignalSide",
    "Trade",
    "TradeSetup",
    "TradeSide",
    "Trend",
]
