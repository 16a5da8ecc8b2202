# indicators/atr.py
from typing import List, Sequence

from errors import InsufficientDataError
from models import Candle


def true_ranges(candles: Sequence[Candle]) -> List[float]:
    """
    True range of every candle after the first:
    max(h - l, |h - prev_close|, |l - prev_close|).
    """
    out: List[float] = []
    for prev, cur in zip(candles, candles[1:]):
        out.append(max(cur.h - cur.l, abs(cur.h - prev.c), abs(cur.l - prev.c)))
    return out


def compute_atr(candles: Sequence[Candle]) -> float:
    """
    Simple mean of true ranges over a chronological window (no smoothing).
    Raises InsufficientDataError for fewer than 2 candles.
    """
    if len(candles) < 2:
        raise InsufficientDataError("ATR candles", required=2, got=len(candles))
    trs = true_ranges(candles)
    return sum(trs) / len(trs)
