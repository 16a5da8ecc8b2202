# indicators/liquidation.py
from typing import Any, Dict, Iterable, List

from models import LiquidationBias, LiquidationCount

DEFAULT_BIAS_RATIO = 1.5


def classify_liquidation_bias(
    long_count: int,
    short_count: int,
    ratio: float = DEFAULT_BIAS_RATIO,
) -> LiquidationBias:
    """
    Which side is being forced out:
      - longs > shorts * ratio -> long_liq
      - shorts > longs * ratio -> short_liq
      - otherwise -> none
    """
    if long_count > short_count * ratio:
        return "long_liq"
    if short_count > long_count * ratio:
        return "short_liq"
    return "none"


def _flatten(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # OKX groups individual fills under "details"
    out: List[Dict[str, Any]] = []
    for row in rows:
        details = row.get("details")
        if isinstance(details, list):
            out.extend(details)
        else:
            out.append(row)
    return out


def count_liquidations(rows: Iterable[Dict[str, Any]], lookback: int = 100) -> LiquidationCount:
    """
    Tallies posSide over the newest `lookback` filled liquidations.
    Rows are expected newest-first, as the exchange returns them.
    """
    events = _flatten(rows)[:lookback]
    longs = sum(1 for e in events if e.get("posSide") == "long")
    shorts = sum(1 for e in events if e.get("posSide") == "short")
    return LiquidationCount(long_count=longs, short_count=shorts)
