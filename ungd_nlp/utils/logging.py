# ungd_nlp/utils/logging.py

import logging
import sys

from ungd_nlp.core.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str | int | None = None):
    level = level or settings.LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # gensim and matplotlib are chatty at INFO
    if settings.ENV == "production":
        for name in ("gensim", "matplotlib", "PIL"):
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("✅ Logging system initialized")
