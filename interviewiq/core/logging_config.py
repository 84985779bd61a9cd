from __future__ import annotations

import logging
import sys
from logging.config import dictConfig

from interviewiq.core.request_id import get_request_id

LOG_FORMAT = (
    "[%(asctime)s] [%(levelname)s] [%(request_id)s] "
    "%(name)s:%(funcName)s:%(lineno)d - %(message)s"
)


class RequestIdFilter(logging.Filter):
    """Inject the current request id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Configure the ``interviewiq`` logger namespace.

    Args:
        level: log level name for the console handler and logger.
    """
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {
                "()": RequestIdFilter,
            },
        },
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "filters": ["request_id"],
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "interviewiq": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }

    dictConfig(logging_config)
