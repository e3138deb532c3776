import sys
from loguru import logger
from storefront.config import get_config

class AppLogger:
    """Logger setup shared by the storefront client and the orders API.

    Sends records to stdout at the level from get_config().log_level.
    """
    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        logger.remove()
        logger.add(
            sink=sys.stdout,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Return the loguru logger, bound to `component` when a name is given."""
        if name:
            return self.logger.bind(component=name)
        return self.logger

def get_logger(name: str = None):
    """Get a new application logger using the latest config."""
    return AppLogger().get_logger(name)
