from contextvars import ContextVar
import logging
import logging.config
from typing import Any

from openweather_extension.config import settings

correlation_id_contextvar: ContextVar[str] = ContextVar("correlation_id")


class CorrelationFormatter(logging.Formatter):
    """Formatter that safely handles missing correlation_id fields."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "system"
        return super().format(record)


class CorrelationFilter(logging.Filter):
    """Logging filter that adds the function call's correlation ID to log records."""

    def __init__(self, contextvar: ContextVar[str]):
        super().__init__()
        self.contextvar = contextvar

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = self.contextvar.get("system")
        return True


def logging_config(level: str = "INFO") -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": CorrelationFormatter,
                "fmt": "%(asctime)s - %(correlation_id)s - %(name)s - %(levelname)s - %(message)s",
            }
        },
        "filters": {
            "correlation": {
                "()": CorrelationFilter,
                "contextvar": correlation_id_contextvar,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["correlation"],
            }
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            # Request lines include the query string, appid included
            "httpx": {"level": "WARNING", "propagate": True},
            "httpcore": {"level": "WARNING", "propagate": True},
        },
    }


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig(logging_config(level or settings.logging.level))
