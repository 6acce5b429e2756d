import sys

from loguru import logger


def setup_console_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> {message}")
