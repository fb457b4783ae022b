"""
Logging Configuration
Sets up the package logger for the wheel engine.

The library itself only creates module loggers; nothing is printed until the
host application calls `setup_logging()`.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "wheelview"

# Modules that log on every drag move or selection change
FRAME_LOGGERS = (
    "wheelview.layout.selection",
    "wheelview.controller.gesture",
)

_FORMATTER = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(_FORMATTER)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    frame_debug: bool = False
) -> logging.Logger:
    """
    Configures the logger for the 'wheelview' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        frame_debug: Also emit the per-frame DEBUG records of the selection
            tracker and the gesture controller when level is DEBUG.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling twice must not duplicate records
    logger.handlers.clear()
    logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), level))
    if log_file:
        logger.addHandler(_make_handler(logging.FileHandler(log_file, mode='w', encoding='utf-8'), level))

    frame_level = logging.NOTSET if frame_debug else max(level, logging.INFO)
    for name in FRAME_LOGGERS:
        logging.getLogger(name).setLevel(frame_level)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
