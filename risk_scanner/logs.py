# risk_scanner/logs.py
import sys

from loguru import logger


def configure_logging(level: str = "WARNING", debug: bool = False) -> None:
    """
    Replace loguru's default sink with a single stderr sink.
    stdout stays reserved for reports.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name} - {message}",
    )
