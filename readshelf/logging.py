"""Logging setup for the client library."""

import sys

from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink=sys.stderr) -> int:
    """
    Replace loguru's default handler with a single configured sink.
    
    Args:
        level: Minimum log level
        sink: Destination accepted by ``logger.add``
        
    Returns:
        Handler id of the added sink
    """
    logger.remove()
    return logger.add(sink, level=level.upper(), format=LOG_FORMAT)
