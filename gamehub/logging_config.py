import logging
from typing import Optional

from gamehub.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Return a module-scoped logger for the hub.

    ``level`` overrides ``settings.log_level`` (``LOG_LEVEL`` in the environment).
    Handlers are only installed when the host application has none, so an
    integrator's own logging setup is left alone.
    """
    level = (level or settings.log_level).upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
