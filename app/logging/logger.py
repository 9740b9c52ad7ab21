import logging
import sys
from typing import ClassVar

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class ContextFormatter(logging.Formatter):
    """Appends ``key=value`` pairs passed as keyword arguments to ``Log`` calls."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        }
        if not context:
            return line
        return line + " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))


class Log:
    """Centralized logging with structured format.

    Keyword arguments become context fields: ``Log.info("done", job_id=3)``.
    """

    FORMAT: ClassVar[str] = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s"

    _logger: logging.Logger = logging.getLogger("docanalysis")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(ContextFormatter(cls.FORMAT))
            cls._logger.addHandler(handler)
            cls._logger.propagate = False

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra=context)

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(message, extra=context)
