import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "passlib")


def setup_logging(level: str | None = None):
    """
    Console + rotating file ($LOG_DIR/app.log, default logs/).
    Safe to call more than once.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if root.handlers:
        return

    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=FMT, datefmt=DATEFMT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    for h in (console, file_handler):
        h.setLevel(level)
        root.addHandler(h)
