import logging
import os
from typing import Optional

from chainbuild.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: Optional[str] = None) -> str:
    """Pick the explicit level, else the environment, else the default."""

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL
    return level


def configure_logging(*, level: Optional[str] = None, fmt: str = LOG_FORMAT) -> None:
    """Configure root logging once; later calls only adjust the level."""

    level = resolve_level(level)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=fmt)
    root_logger.setLevel(level)
