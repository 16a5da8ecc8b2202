# signal_router.py
import logging
from dataclasses import dataclass
from typing import Callable, List

from models import TradeSetup

logger = logging.getLogger(__name__)


@dataclass
class SignalRouter:
    """
    Passes every cycle result through all attached handlers.
    A failing handler is logged and does not stop the others.
    """
    handlers: List[Callable[[TradeSetup], None]]

    def route(self, setup: TradeSetup) -> None:
        for handler in self.handlers:
            try:
                handler(setup)
            except Exception:
                logger.exception(
                    "❌ Signal handler %s failed", getattr(handler, "__name__", handler)
                )
