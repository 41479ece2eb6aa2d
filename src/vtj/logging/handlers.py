"""JSON log formatting for vtj."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries, plus the ones added by formatting and
# by JobContextFilter. Anything else on a record came from ``extra=``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "job_id", "job_tag"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON line.

    Keys: timestamp (UTC, millisecond precision), level, logger, message,
    job_id inside job_context(), context for ``extra=`` fields such as the
    subprocess command name, and exception when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        job_id = getattr(record, "job_id", None)
        if job_id:
            entry["job_id"] = job_id

        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
