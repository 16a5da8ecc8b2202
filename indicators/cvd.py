# indicators/cvd.py
from typing import Any, Dict, Iterable, List, Sequence

from models import CvdSignal, Trade
from indicators.trend import classify_trend

_CVD_LABELS = {
    "increasing": "bullish",
    "decreasing": "bearish",
    "neutral": "neutral",
}


def normalize_trades(rows: Iterable[Dict[str, Any]]) -> List[Trade]:
    """
    Raw trade rows (ccxt unified format, any order) -> chronological Trade list.
    Rows without a usable side or amount are skipped.
    """
    trades: List[Trade] = []
    for row in rows:
        side = row.get("side")
        amount = row.get("amount")
        if side not in ("buy", "sell") or amount is None:
            continue
        trades.append(Trade(size=float(amount), side=side, ts_ms=int(row.get("timestamp") or 0)))
    trades.sort(key=lambda t: t.ts_ms)
    return trades


def compute_cvd(trades: Sequence[Trade]) -> List[float]:
    """
    Cumulative volume delta, oldest to newest.
    Buy adds size, sell subtracts it; one output point per trade.
    """
    cvd: List[float] = []
    cum = 0.0
    for trade in trades:
        cum += trade.size if trade.side == "buy" else -trade.size
        cvd.append(cum)
    return cvd


def classify_cvd(cvd: Sequence[float]) -> CvdSignal:
    return _CVD_LABELS[classify_trend(cvd)]
