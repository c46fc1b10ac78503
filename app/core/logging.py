import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


"""Logging setup for the application. - logging"""

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once. - setup_logging

    Attaches a stdout handler and, when ``logfile`` is given, a rotating file
    handler. Calling it again (tests, repeated create_app) is a no-op.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    if logfile:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # keep SQL echo out of the application log
    for name in ("sqlalchemy.engine", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)
