import logging
import sys
from mediroster.core.config import settings

def setup_logging():
    """
    Configure the application logger.

    Module loggers are created as children of "mediroster" so they share
    the handler installed here.
    """
    logger = logging.getLogger("mediroster")
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger

def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)

logger = setup_logging()
