import logging
import sys
from typing import Optional

LOGGER_NAME = "blockdoc"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Route the ``blockdoc`` logger to stderr and, optionally, a file.

    Unknown level names fall back to WARNING. Existing handlers are kept
    unless ``force`` is set, so library users who configured the logger
    themselves are left alone.

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
        # stdout carries serialized output
        _attach(logger, logging.StreamHandler(sys.stderr), formatter)
        if log_file:
            _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), formatter)

    logger.propagate = False
    return logger
