import logging
from typing import Literal, Optional

logger = logging.getLogger("tooltailor")
logger_convert = logging.getLogger("tooltailor.convert")

logger.setLevel(logging.DEBUG)

logger_handler = logging.StreamHandler()
logger.addHandler(logger_handler)


LogLevel = Literal["silent", "warn", "debug"]
LOG_LEVELS = ("silent", "warn", "debug")


class ConversionLog:
    """
    Level gate in front of an injected logger.

    ``silent`` drops everything, ``warn`` lets warnings through and ``debug``
    additionally forwards debug traces. The wrapped logger's own level and
    handlers still apply on top.
    """

    def __init__(self, level: LogLevel = "warn", target: Optional[logging.Logger] = None):
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{level}', expected one of {', '.join(LOG_LEVELS)}"
            )
        self.level = level
        self.target = target or logger_convert

    def warning(self, message: str) -> None:
        if self.level != "silent":
            self.target.warning(message)

    def debug(self, message: str) -> None:
        if self.level == "debug":
            self.target.debug(message)
