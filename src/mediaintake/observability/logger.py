"""Structured JSON logger for mediaintake.

Every log record is emitted as a single-line JSON object so upload
activity can be followed in a log aggregation pipeline without extra
parsing.

Typical structured output::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "INFO",
     "logger": "mediaintake.transfer", "message": "upload succeeded",
     "op": "upload", "session_id": "3f2a...", "size_bytes": 2097152}

Logger hierarchy
----------------

All loggers live under ``mediaintake``; each gets its own handler and
does not propagate, so a level set on one leaves the others alone.

* ``mediaintake.widget`` -- rejected submissions (``op=surface_error``).
* ``mediaintake.transfer`` -- upload start / success / failure with the
  session id and duration.
* ``mediaintake.transport`` -- request dispatch (DEBUG) and network
  errors (WARNING).
* ``mediaintake.registry`` -- references added and removed.
* ``mediaintake.credentials`` -- unreadable session blobs (WARNING).

Bearer tokens are never logged; only an ``authorized`` flag is.

Usage::

    from mediaintake.observability import get_logger

    log = get_logger("mediaintake.transfer")
    log.info("upload started", extra={"extra_fields": {"file_name": "a.png"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed via ``extra={"extra_fields": {...}}`` are
    merged into the top-level object; ``exc_info`` and ``stack_info``
    are serialised when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(
            record, "extra_fields", None
        )
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


# One handler per logger name so that ``get_logger`` is idempotent.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "mediaintake",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"mediaintake"``.
    level:
        Minimum log level, as an ``int`` or a case-insensitive string.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        A logger with a :class:`StructuredFormatter` handler attached.
        Repeated calls with the same *name* do not add duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        # Root handlers would print every record twice.
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
