# indicators/__init__.py
from .trend import classify_trend
from .liquidation import DEFAULT_BIAS_RATIO, classify_liquidation_bias, count_liquidations
from .cvd import classify_cvd, compute_cvd, normalize_trades
from .whale import DEFAULT_PRICE_WINDOW, classify_price_trend, estimate_whale_trend
from .atr import compute_atr, true_ranges

__all__ = [
    "DEFAULT_BIAS_RATIO",
    "DEFAULT_PRICE_WINDOW",
    "classify_cvd",
    "classify_liquidation_bias",
    "classify_price_trend",
    "classify_trend",
    "compute_atr",
    "compute_cvd",
    "count_liquidations",
    "estimate_whale_trend",
    "normalize_trades",
    "true_ranges",
]
