# engine/signal_rules.py
from typing import Optional, Tuple

from models import Indicators, SignalSide

# (signal, comment) or None when the rule does not fire
Verdict = Optional[Tuple[SignalSide, str]]

DEFAULT_VERDICT: Tuple[SignalSide, str] = ("WAIT", "No clear setup yet.")


# 1. Whale distributing while OI builds up: retail is long, trap short
def rule_short_on_distribution(ind: Indicators) -> Verdict:
    if ind.whale_trend == "decreasing" and ind.oi_trend == "increasing":
        if ind.cvd_signal == "bearish" or ind.liquidation_bias == "long_liq":
            return "SHORT", "Whale decreasing + OI increasing + CVD negative → favour SHORT."
    return None


# 2. Whale accumulating while OI builds up: retail is short, trap long
def rule_long_on_accumulation(ind: Indicators) -> Verdict:
    if ind.whale_trend == "increasing" and ind.oi_trend == "increasing":
        if ind.cvd_signal == "bullish" or ind.liquidation_bias == "short_liq":
            return "LONG", "Whale increasing + OI increasing + CVD positive → favour LONG."
    return None


# 3. No divergence between whales and OI: always the last word
def rule_wait_on_neutral(ind: Indicators) -> Verdict:
    if ind.whale_trend == "neutral" or ind.oi_trend == "neutral":
        return "WAIT", "No clear divergence between whales and OI."
    return None
