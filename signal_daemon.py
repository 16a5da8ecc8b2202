# signal_daemon.py

import asyncio
import logging
import time
from typing import Optional

import ccxt

from config import Config, load_config
from engine.signal_service import SignalService
from errors import SignalBotError, UpstreamFetchError
from handlers.log_handler import log_handler
from handlers.table_handler import make_table_handler
from handlers.telegram_handler import make_telegram_handler
from market_data import MarketDataClient, make_exchange
from models import TradeSetup
from notifier import send_telegram_message
from signal_formatter import format_startup
from signal_router import SignalRouter
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

RATE_LIMIT_PAUSE_SEC = 2.0


def make_router(cfg: Config) -> SignalRouter:
    return SignalRouter(
        handlers=[
            make_table_handler(cfg.symbol),
            log_handler,
            make_telegram_handler(cfg.tg_token, cfg.tg_chat_id, cfg.symbol, cfg.tz),
        ]
    )


async def run_cycle(service: SignalService, router: SignalRouter) -> Optional[TradeSetup]:
    """
    One evaluation: fresh snapshot, decision, bracket, routing.
    Errors end this cycle only; the caller keeps the previous output on screen.
    """
    try:
        setup = await service.build_trade_setup()
    except UpstreamFetchError as e:
        logger.error("❌ Fetch %s failed for %s: %s", e.source, e.instrument, e)
        if isinstance(e.__cause__, ccxt.RateLimitExceeded):
            logger.warning("⏳ Rate limit on %s, pausing %.0fs", e.instrument, RATE_LIMIT_PAUSE_SEC)
            await asyncio.sleep(RATE_LIMIT_PAUSE_SEC)
        return None
    except SignalBotError as e:
        logger.error("❌ Cycle failed for %s: %s", service.cfg.symbol, e)
        return None

    await asyncio.to_thread(router.route, setup)
    return setup


async def run_forever(cfg: Config) -> None:
    exchange = await make_exchange(cfg.exchange_id)
    try:
        service = SignalService(MarketDataClient(exchange, cfg.symbol), cfg)
        router = make_router(cfg)

        try:
            await asyncio.to_thread(
                send_telegram_message,
                cfg.tg_token,
                cfg.tg_chat_id,
                format_startup(cfg.symbol, cfg.timeframe, cfg.poll_sec),
            )
        except SignalBotError as e:
            logger.error("❌ Startup message not delivered: %s", e)

        logger.info("🟢 Monitoring %s on %s every %.0fs", cfg.symbol, cfg.exchange_id, cfg.poll_sec)

        while True:
            started = time.monotonic()
            try:
                await run_cycle(service, router)
            except Exception:
                logger.exception("❌ Unexpected error in cycle for %s", cfg.symbol)
            elapsed = time.monotonic() - started
            await asyncio.sleep(max(0.0, cfg.poll_sec - elapsed))
    finally:
        await exchange.close()


def main():
    cfg = load_config()
    setup_logging(cfg.log_file, cfg.log_level)
    try:
        asyncio.run(run_forever(cfg))
    except KeyboardInterrupt:
        logger.info("🛑 Stopped")


if __name__ == "__main__":
    main()
