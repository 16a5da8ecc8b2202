# handlers/log_handler.py
import logging

from models import TradeSetup

logger = logging.getLogger("signals")


def log_handler(setup: TradeSetup) -> None:
    if not setup.is_actionable:
        logger.info("⏳ No valid trade signal yet: %s", setup.comment)
        return
    logger.info(
        "🚨 %s entry=%s sl=%s tp=%s rr=%s | whale=%s oi=%s cvd=%s liq=%s",
        setup.signal,
        setup.entry,
        setup.stop_loss,
        setup.take_profit,
        setup.risk_reward,
        setup.whale_trend,
        setup.oi_trend,
        setup.cvd_signal,
        setup.liquidation_bias,
    )
