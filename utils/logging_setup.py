# utils/logging_setup.py
import logging
import logging.handlers
import sys
from pathlib import Path


def setup_logging(logfile: str = "logs/signal_bot.log", console_level: str = "INFO") -> None:
    """
    Root logger with a rotating file handler (DEBUG) and a stdout handler.
    Safe to call more than once: existing root handlers are replaced.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logfile:
        try:
            Path(logfile).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                logfile,
                maxBytes=10485760,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning("⚠️ File logging disabled (%s): %s", logfile, e)

    # ccxt is chatty at DEBUG
    logging.getLogger("ccxt").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
