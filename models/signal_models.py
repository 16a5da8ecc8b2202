# models/signal_models.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.labels import CvdSignal, LiquidationBias, SignalSide, Trend


class SignalResult(BaseModel):
    """
    Outcome of one evaluation cycle: the four indicators and the verdict.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: str
    whale_trend: Trend
    oi_trend: Trend
    cvd_signal: CvdSignal
    liquidation_bias: LiquidationBias
    signal: SignalSide
    comment: str

    @property
    def is_actionable(self) -> bool:
        return self.signal != "WAIT"


class TradeSetup(SignalResult):
    """
    SignalResult plus the bracket. The four price fields are None
    for WAIT and when volatility is degenerate.
    """
    entry: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    risk_reward: Optional[float] = None

    @property
    def has_bracket(self) -> bool:
        return self.stop_loss is not None and self.take_profit is not None
