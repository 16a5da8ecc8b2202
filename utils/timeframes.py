# utils/timeframes.py
import ccxt


def tf_seconds(timeframe: str) -> int:
    """
    Timeframe string ('1m', '15m', '1h' ...) to seconds.
    Used by the fetch layer to stamp candle close times.
    """
    return ccxt.Exchange.parse_timeframe(timeframe)


def ts_close_from_open(t_open_ms: int, timeframe_sec: int) -> int:
    return t_open_ms + timeframe_sec * 1000
