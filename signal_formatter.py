# signal_formatter.py
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from models import TradeSetup


def _fmt(value: Optional[float], digits: int) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


def format_setup(setup: TradeSetup, symbol: str, tz: str) -> str:
    """
    Telegram alert for a LONG/SHORT setup.
    """
    icon = "🟢" if setup.signal == "LONG" else "🔴" if setup.signal == "SHORT" else "⚪"
    now = datetime.now(ZoneInfo(tz)).strftime("%H:%M:%S %d/%m/%Y")

    text = (
        f"🦈 <b>{symbol} Futures Alert</b>\n"
        f"<b>Signal:</b> {icon} <b>{setup.signal}</b>\n"
        f"<b>Entry:</b> {_fmt(setup.entry, 4)}\n"
        f"<b>TP:</b> {_fmt(setup.take_profit, 4)}\n"
        f"<b>SL:</b> {_fmt(setup.stop_loss, 4)}\n"
        f"<b>R:R</b> ≈ {_fmt(setup.risk_reward, 2)}\n"
        f"<b>Comment:</b> {setup.comment}\n"
        f"<b>Time:</b> {now}"
    )
    return text


def format_startup(symbol: str, timeframe: str, poll_sec: float) -> str:
    return f"🟢 <b>Signal bot started</b>\n{symbol} {timeframe}, every {poll_sec:g}s"
