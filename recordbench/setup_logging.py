import logging, sys
from typing import Optional, TextIO

from .settings import LOG_LEVEL

def setup_logging(level: Optional[str] = None, stream: TextIO = sys.stdout):
    logger = logging.getLogger()
    if logger.handlers:  # don't double add during reload
        return
    level = level or LOG_LEVEL
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(stream)
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)
