"""Logging configuration for the content-preview command line.

The library modules only create loggers and tag per-document records
with ``path`` (and ``error_code`` on failures). Installing handlers is
left to whoever runs the pipeline; the CLI does it through
``setup_logging``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Iterable, Optional

# Record attributes set through ``extra=`` by this package.
DOCUMENT_FIELDS = ("path", "error_code")


class _JsonFormatter(logging.Formatter):
    """Emit each log record as a single JSON line.

    Document fields are copied to the top level when a record carries
    them, so ``logger.error("...", extra={"path": "a.md"})`` comes out
    as ``{..., "path": "a.md"}``.
    """

    def __init__(self, fields: Iterable[str] = DOCUMENT_FIELDS) -> None:
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self.fields:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure process-wide logging.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL. Defaults to INFO.
        log_format: ``"json"`` for one JSON object per line, ``"text"`` for
                    human-readable. Defaults to ``"text"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "text").lower()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(fmt="%(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(__name__).debug("Logging configured: level=%s format=%s", level, fmt)
