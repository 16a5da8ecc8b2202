# engine/trade_setup.py
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from errors import DegenerateVolatilityError
from models import SignalResult, SignalSide, TradeSetup

logger = logging.getLogger(__name__)

DEFAULT_ATR_MULTIPLIER = 1.5
DEFAULT_REWARD_RISK_RATIO = 2.0


def compute_bracket(
    signal: SignalSide,
    entry: float,
    atr: float,
    atr_multiplier: float = DEFAULT_ATR_MULTIPLIER,
    reward_risk_ratio: float = DEFAULT_REWARD_RISK_RATIO,
) -> Optional[Tuple[float, float, float]]:
    """
    ATR bracket around the entry price, as (stop, target, risk_reward):
    - long: stop below entry by atr * multiplier, target above by that times the ratio
    - short: mirrored
    - wait: None
    risk_reward is recomputed from the prices and checked against the ratio;
    the configured ratio is returned when they agree to float precision.
    """
    if signal == "WAIT":
        return None

    if atr is None or not math.isfinite(atr) or atr <= 0:
        raise DegenerateVolatilityError(atr)

    risk = atr * atr_multiplier
    reward = risk * reward_risk_ratio

    if signal == "LONG":
        stop = entry - risk
        target = entry + reward
        stop_distance = entry - stop
        target_distance = target - entry
    else:
        stop = entry + risk
        target = entry - reward
        stop_distance = stop - entry
        target_distance = entry - target

    # atr too small to move the price at this magnitude
    if stop_distance <= 0:
        raise DegenerateVolatilityError(atr)

    rr = target_distance / stop_distance
    if math.isclose(rr, reward_risk_ratio, rel_tol=1e-9):
        rr = float(reward_risk_ratio)
    else:
        logger.warning("⚠️ price-derived R:R %.6f differs from configured %.6f", rr, reward_risk_ratio)

    return stop, target, rr


def build_trade_setup(
    result: SignalResult,
    entry: float,
    atr: Optional[float],
    atr_multiplier: float = DEFAULT_ATR_MULTIPLIER,
    reward_risk_ratio: float = DEFAULT_REWARD_RISK_RATIO,
) -> TradeSetup:
    """
    Attaches entry/stop/target/R:R to a signal.
    WAIT and degenerate volatility both yield a setup without bracket fields.
    """
    fields = result.model_dump()
    if result.signal == "WAIT":
        return TradeSetup(**fields)

    try:
        bracket = compute_bracket(result.signal, entry, atr, atr_multiplier, reward_risk_ratio)
    except DegenerateVolatilityError as e:
        logger.warning("⚠️ %s signal without bracket: %s", result.signal, e)
        return TradeSetup(**fields)

    stop, target, rr = bracket
    return TradeSetup(
        **fields,
        entry=entry,
        stop_loss=stop,
        take_profit=target,
        risk_reward=rr,
    )
