import logging
import sys
from typing import Optional

from mercado.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach one stdout handler to the root logger; no-op once configured."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel((level or settings.log_level).upper())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "mercado")
