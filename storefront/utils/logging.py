import sys
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO"):
    """
    Replaces loguru's default sink with a stderr sink at the configured level.
    Called once from create_app().
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    return logger


def get_logger(name: str | None = None):
    """Get the shared logger, bound to `name` when given."""
    if name:
        return logger.bind(name=name)
    return logger
