"""
Logging configuration.

Applications embedding the strategy usually configure logging themselves;
setup_global_logging() is provided for services that want structured JSON
logs on stdout.
"""

import json
import logging
import os
from datetime import UTC, datetime


# Attributes present on every LogRecord; anything else came from `extra=`
_RESERVED_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter.

    Emits one JSON object per record, including fields passed via `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A JSON string representing the log record.
        """
        log_object = {
            "timestamp": datetime.now(UTC).isoformat(),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_object[key] = value

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def setup_global_logging(level: str | None = None) -> None:
    """
    Configure the root logger with the JSON formatter.

    The level defaults to FACEBOOK_AUTHCODE_LOG_LEVEL, then INFO.
    """
    level_name = (level or os.getenv("FACEBOOK_AUTHCODE_LOG_LEVEL") or "INFO").upper()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    # Remove existing handlers to avoid duplicate logs
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)
