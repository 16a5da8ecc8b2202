# indicators/trend.py
from typing import Sequence

from models import Trend


def classify_trend(series: Sequence[float]) -> Trend:
    """
    Direction of a chronological series from its last two points:
      - fewer than 2 points -> neutral
      - last > previous -> increasing
      - last < previous -> decreasing
      - equal -> neutral
    """
    if len(series) < 2:
        return "neutral"
    diff = series[-1] - series[-2]
    if diff > 0:
        return "increasing"
    if diff < 0:
        return "decreasing"
    return "neutral"
