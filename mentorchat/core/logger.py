"""
Shared application logger.
"""

import logging
import sys

from mentorchat.core.config import get_settings

LOGGER_NAME = "mentorchat"


def _build_logger() -> logging.Logger:
    settings = get_settings()
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    return log


logger = _build_logger()
