"""
Logger sinks for LoggerMiddleware.

A sink is anything with ``log(level, message, context)``, the shape of a
PSR-3 logger. `StdlibLoggerSink` forwards records to the standard
`logging` module and attaches the transaction context to the record as
``record.context``.
"""

import logging
from typing import Any
from typing import Protocol

PSR_LEVELS = {
    "emergency": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "notice": logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class LoggerSink(Protocol):
    def log(self, level: Any, message: str, context: dict[str, Any]) -> None:
        """
        Receive one log record.

        Args:
            level: The configured level, passed through unchanged
            message (str): Rendered message
            context (dict): Transaction context as a nested dict
        """


def to_logging_level(level: Any) -> int:
    """Map a PSR-3 level name or a stdlib level to a stdlib level number."""
    if isinstance(level, int):
        return level
    name = str(level).strip().lower()
    if name in PSR_LEVELS:
        return PSR_LEVELS[name]
    if name.isdigit():
        return int(name)
    raise ValueError(f"Unknown log level: {level!r}")


class StdlibLoggerSink:
    """
    Sink that writes to a `logging.Logger`.

    Uses standard Python logging.
    """

    def __init__(self, logger: logging.Logger | str = "http_log_middleware.transactions"):
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger

    def log(self, level: Any, message: str, context: dict[str, Any]) -> None:
        self.logger.log(to_logging_level(level), message, extra={"context": context})
