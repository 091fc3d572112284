"""Logging configuration."""

import logging
import sys
from typing import Optional

from tradeleague.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s [%(threadName)s] - %(message)s"

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging from settings.

    ``level`` overrides ``settings.log_level``. A no-op for the root handler
    when logging is already configured (e.g. under uvicorn).
    """
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
