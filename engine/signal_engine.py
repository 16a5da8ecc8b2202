# engine/signal_engine.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from models import Indicators, SignalResult
from engine.signal_rules import (
    DEFAULT_VERDICT,
    Verdict,
    rule_long_on_accumulation,
    rule_short_on_distribution,
    rule_wait_on_neutral,
)


# rule function type
SignalRuleFunc = Callable[[Indicators], Verdict]


@dataclass
class SignalRule:
    name: str
    func: SignalRuleFunc
    enabled: bool = True


def default_rules() -> List[SignalRule]:
    return [
        SignalRule("short_on_distribution", rule_short_on_distribution),
        SignalRule("long_on_accumulation", rule_long_on_accumulation),
        SignalRule("wait_on_neutral", rule_wait_on_neutral),
    ]


class SignalEngine:
    """
    Runs every enabled rule in order over the indicator tuple.
    A rule that fires overwrites whatever an earlier rule decided,
    so the last matching rule wins.
    """
    def __init__(self, rules: Optional[List[SignalRule]] = None):
        self.rules = rules if rules is not None else default_rules()

    def decide(self, indicators: Indicators, timestamp: Optional[str] = None) -> SignalResult:
        signal, comment = DEFAULT_VERDICT
        for rule in self.rules:
            if not rule.enabled:
                continue
            verdict = rule.func(indicators)
            if verdict is not None:
                signal, comment = verdict

        return SignalResult(
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            whale_trend=indicators.whale_trend,
            oi_trend=indicators.oi_trend,
            cvd_signal=indicators.cvd_signal,
            liquidation_bias=indicators.liquidation_bias,
            signal=signal,
            comment=comment,
        )
