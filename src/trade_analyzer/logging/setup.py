import sys
import logging
from typing import Optional

from loguru import logger

from trade_analyzer.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


class InterceptHandler(logging.Handler):
    """Routes standard ``logging`` records (e.g. from pydantic or rich) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configures the loguru console sink, an optional rotating file sink, and
    routes standard logging through loguru.

    Args:
        level: Overrides ``settings.log_level``.
        log_file: Overrides ``settings.log_file``; no file sink when both are unset.
    """
    logger.remove()  # Remove default handler

    log_level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    logger.add(
        sys.stderr,
        level=log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",  # File keeps everything regardless of console level
            format=FILE_FORMAT,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    target = f" and {log_file}" if log_file else ""
    logger.info(f"Logging initialized with level {log_level} to stderr{target}.")
