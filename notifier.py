# notifier.py
import logging

import requests

from errors import NotificationDeliveryError

logger = logging.getLogger(__name__)


def send_telegram_message(token: str, chat_id: str, text: str) -> bool:
    """
    Sends an HTML message through the Telegram Bot API.
    Empty credentials: logs a warning and returns False.
    Transport or API failure: NotificationDeliveryError.
    """
    if not token or not chat_id:
        logger.warning("⚠️ TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID is empty, skipping send")
        return False

    try:
        r = requests.post(
            f"https://api.telegram.org/bot{token}/sendMessage",
            json={
                "chat_id": chat_id,
                "text": text,
                "parse_mode": "HTML",
                "disable_web_page_preview": True,
            },
            timeout=10,
        )
        r.raise_for_status()
    except requests.RequestException as e:
        raise NotificationDeliveryError("telegram", str(e)) from e
    return True
