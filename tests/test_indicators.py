import pytest

from conftest import make_candles, make_trades
from errors import InsufficientDataError
from indicators import (
    classify_cvd,
    classify_liquidation_bias,
    classify_price_trend,
    classify_trend,
    compute_atr,
    compute_cvd,
    count_liquidations,
    estimate_whale_trend,
    normalize_trades,
)
from models import Candle, LiquidationCount


@pytest.mark.parametrize(
    "series, expected",
    [
        ([], "neutral"),
        ([42.0], "neutral"),
        ([1, 2], "increasing"),
        ([2, 1], "decreasing"),
        ([5, 5], "neutral"),
        ([9, 1, 3], "increasing"),
    ],
)
def test_classify_trend(series, expected):
    assert classify_trend(series) == expected


def test_liquidation_bias_boundary():
    assert classify_liquidation_bias(151, 100) == "long_liq"
    assert classify_liquidation_bias(150, 100) == "none"
    assert classify_liquidation_bias(100, 50) == "long_liq"
    assert classify_liquidation_bias(100, 151) == "short_liq"
    assert classify_liquidation_bias(0, 0) == "none"


def test_liquidation_bias_ratio_is_configurable():
    assert classify_liquidation_bias(120, 100, ratio=1.1) == "long_liq"
    assert classify_liquidation_bias(151, 100, ratio=2.0) == "none"


def test_count_liquidations_reads_nested_details_and_truncates():
    rows = [
        {"details": [{"posSide": "long"}, {"posSide": "long"}, {"posSide": "short"}]},
        {"details": [{"posSide": "short"}]},
        {"posSide": "long"},
    ]
    assert count_liquidations(rows) == LiquidationCount(long_count=3, short_count=2)
    assert count_liquidations(rows, lookback=3) == LiquidationCount(long_count=2, short_count=1)


def test_cvd_accumulates_chronologically():
    trades = make_trades((10.0, "buy"), (4.0, "sell"), (6.0, "buy"))
    assert compute_cvd(trades) == [10.0, 6.0, 12.0]


def test_cvd_degenerate_input_is_neutral():
    assert compute_cvd([]) == []
    assert classify_cvd(compute_cvd([])) == "neutral"
    assert classify_cvd(compute_cvd(make_trades((3.0, "buy")))) == "neutral"


def test_cvd_signal_follows_last_step():
    assert classify_cvd([10.0, 6.0, 12.0]) == "bullish"
    assert classify_cvd([10.0, 6.0]) == "bearish"
    assert classify_cvd([6.0, 6.0]) == "neutral"


def test_normalize_trades_reverses_newest_first_feed():
    raw = [
        {"timestamp": 3, "side": "buy", "amount": 6},
        {"timestamp": 2, "side": "sell", "amount": 4},
        {"timestamp": 1, "side": "buy", "amount": 10},
        {"timestamp": 4, "side": None, "amount": 1},
    ]
    trades = normalize_trades(raw)
    assert [t.ts_ms for t in trades] == [1, 2, 3]
    assert compute_cvd(trades) == [10.0, 6.0, 12.0]


def test_price_trend_uses_first_and_last_of_window():
    candles = make_candles([5.0, 1.0, 1.2, 0.9, 1.1, 1.3])
    # window of 5 starts at 1.0, not at 5.0
    assert classify_price_trend(candles, window=5) == "up"
    assert classify_price_trend(candles, window=6) == "down"
    assert classify_price_trend(make_candles([2.0, 3.0, 2.0])) == "flat"
    assert classify_price_trend(make_candles([2.0])) == "flat"


@pytest.mark.parametrize(
    "price, oi, liq, expected",
    [
        ("up", "increasing", "short_liq", "increasing"),
        ("down", "increasing", "long_liq", "decreasing"),
        ("up", "increasing", "none", "neutral"),
        ("up", "decreasing", "short_liq", "neutral"),
        ("down", "increasing", "short_liq", "neutral"),
        ("flat", "increasing", "long_liq", "neutral"),
        ("up", "neutral", "short_liq", "neutral"),
    ],
)
def test_whale_trend_needs_all_three_conditions(price, oi, liq, expected):
    assert estimate_whale_trend(price, oi, liq) == expected


def test_atr_mean_of_true_ranges():
    candles = [
        Candle("X", "15m", 1, o=10, h=11, l=9, c=10),
        Candle("X", "15m", 2, o=10, h=10.5, l=9.5, c=10),  # tr = 1
        Candle("X", "15m", 3, o=10, h=13, l=12, c=12.5),   # tr = |13 - 10| = 3
    ]
    assert compute_atr(candles) == pytest.approx(2.0)


def test_atr_is_linear_in_spread():
    closes = [1.0, 1.0, 1.0, 1.0]
    narrow = compute_atr(make_candles(closes, spread=0.05))
    wide = compute_atr(make_candles(closes, spread=0.10))
    assert wide == pytest.approx(2 * narrow)


def test_atr_requires_two_candles():
    with pytest.raises(InsufficientDataError):
        compute_atr(make_candles([1.0]))
    with pytest.raises(InsufficientDataError):
        compute_atr([])


def test_atr_depends_on_candle_order():
    candles = [
        Candle("X", "15m", 1, o=10, h=10, l=10, c=10),
        Candle("X", "15m", 2, o=20, h=20, l=20, c=20),
        Candle("X", "15m", 3, o=20, h=21, l=19, c=20),
    ]
    # chronological: tr = [10, 2]; reversed pairs gap against the wrong close
    assert compute_atr(candles) == pytest.approx(6.0)
    assert compute_atr(list(reversed(candles))) != pytest.approx(6.0)
