# userhub/core/logger.py

import sys
from loguru import logger


def configure_logging(level: str = "INFO"):
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
