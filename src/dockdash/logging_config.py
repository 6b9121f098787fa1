"""Logging setup for the dockdash service."""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# chatty third-party loggers, kept at WARNING unless debugging
_NOISY_LOGGERS = ("httpx", "httpcore", "socketio.client", "engineio.client")


def configure_logging(level: str | int = "INFO", *, debug: bool = False) -> logging.Logger:
    """Configure root logging to stdout and return the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    logger = logging.getLogger("dockdash")
    logger.info("Logging initialized (level=%s)", logging.getLevelName(level))
    return logger
