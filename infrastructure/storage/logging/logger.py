import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def get_logger(name: str, level: int = logging.INFO, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Configure and return a logger.

    The handler is attached once per logger name; later calls only adjust the level.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream_handler = handler or logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        logger.addHandler(stream_handler)
    logger.setLevel(level)
    return logger


def configure_domain_logging(level: int) -> None:
    """Route the chart engine's module loggers through one formatted handler."""
    for name in ("domain", "application"):
        get_logger(name, level=level)
