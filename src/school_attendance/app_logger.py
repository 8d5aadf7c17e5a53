import logging
import os

_DEFAULT_LEVEL = os.getenv("SCHOOL_ATTENDANCE_LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None) -> logging.Logger:
    """Library-friendly: do NOT touch root or add handlers.

    Ensure the package logger exists, set its level, add NullHandler to avoid warnings.
    """
    logger = logging.getLogger("school_attendance")
    level_name = (level or _DEFAULT_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    logger.propagate = True
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger("school_attendance")
    return base.getChild(name) if name else base


logger = setup_logging()
