"""Structured JSON logging configuration."""

import contextvars
import logging
import uuid

from pythonjsonlogger.json import JsonFormatter

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"

# Loggers that are too chatty at DEBUG for request logs
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")  # type: ignore[attr-defined]
        return True


def setup_logging(*, debug: bool = False, sql_echo: bool = False) -> None:
    """Configure the root logger with a JSON formatter and request-id filter.

    SQL statement logging stays at WARNING unless ``sql_echo`` is set, even in debug.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(
        JsonFormatter(
            fmt=LOG_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    )
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if sql_echo else logging.WARNING)


def generate_request_id() -> str:
    """Generate a short request id for the X-Request-ID header."""
    return uuid.uuid4().hex[:16]
