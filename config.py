# config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from engine.trade_setup import DEFAULT_ATR_MULTIPLIER, DEFAULT_REWARD_RISK_RATIO
from indicators import DEFAULT_BIAS_RATIO, DEFAULT_PRICE_WINDOW


@dataclass
class Config:
    exchange_id: str = "okx"
    symbol: str = "SUI/USDT:USDT"
    timeframe: str = "15m"

    oi_timeframe: str = "5m"
    oi_lookback: int = 5
    candle_lookback: int = 15
    price_trend_window: int = DEFAULT_PRICE_WINDOW
    trade_lookback: int = 200
    liq_lookback: int = 100

    liq_bias_ratio: float = DEFAULT_BIAS_RATIO
    atr_multiplier: float = DEFAULT_ATR_MULTIPLIER
    reward_risk_ratio: float = DEFAULT_REWARD_RISK_RATIO

    poll_sec: float = 60.0
    cycle_timeout_sec: float = 30.0

    tg_token: str = ""
    tg_chat_id: str = ""
    tz: str = "Asia/Ho_Chi_Minh"

    log_file: str = "logs/signal_bot.log"
    log_level: str = "INFO"


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = int(raw)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config() -> Config:
    load_dotenv()
    return Config(
        exchange_id=_env_str("EXCHANGE_ID", "okx"),
        symbol=_env_str("SYMBOL", "SUI/USDT:USDT"),
        timeframe=_env_str("TIMEFRAME", "15m"),
        oi_timeframe=_env_str("OI_TIMEFRAME", "5m"),
        oi_lookback=_env_int("OI_LOOKBACK", 5, minimum=2),
        candle_lookback=_env_int("CANDLE_LOOKBACK", 15, minimum=2),
        price_trend_window=_env_int("PRICE_TREND_WINDOW", DEFAULT_PRICE_WINDOW, minimum=2),
        trade_lookback=_env_int("TRADE_LOOKBACK", 200),
        liq_lookback=_env_int("LIQ_LOOKBACK", 100),
        liq_bias_ratio=_env_float("LIQ_BIAS_RATIO", DEFAULT_BIAS_RATIO),
        atr_multiplier=_env_float("ATR_MULTIPLIER", DEFAULT_ATR_MULTIPLIER),
        reward_risk_ratio=_env_float("REWARD_RISK_RATIO", DEFAULT_REWARD_RISK_RATIO),
        poll_sec=_env_float("POLL_INTERVAL_SEC", 60.0),
        cycle_timeout_sec=_env_float("CYCLE_TIMEOUT_SEC", 30.0),
        tg_token=_env_str("TELEGRAM_BOT_TOKEN", ""),
        tg_chat_id=_env_str("TELEGRAM_CHAT_ID", ""),
        tz=_env_str("TZ", "Asia/Ho_Chi_Minh"),
        log_file=_env_str("LOG_FILE", "logs/signal_bot.log"),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
