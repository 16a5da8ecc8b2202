# handlers/telegram_handler.py
import logging

from errors import NotificationDeliveryError
from models import TradeSetup
from notifier import send_telegram_message
from signal_formatter import format_setup

logger = logging.getLogger(__name__)


def make_telegram_handler(tg_token: str, tg_chat_id: str, symbol: str, tz: str):
    def handler(setup: TradeSetup) -> None:
        if not setup.is_actionable:
            return
        text = format_setup(setup, symbol, tz)
        try:
            if send_telegram_message(tg_token, tg_chat_id, text):
                logger.info("🚨 %s signal sent to Telegram", setup.signal)
        except NotificationDeliveryError as e:
            logger.error("❌ Telegram delivery failed for %s %s: %s", symbol, setup.signal, e)
    return handler
