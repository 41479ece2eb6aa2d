"""Job context for structured logging.

Propagates the id of the job being planned or monitored through
contextvars, so every log record emitted while handling a job carries it.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)


def get_job_context() -> str | None:
    """Return the job id of the current context, if any."""
    return _job_id.get()


@contextmanager
def job_context(job_id: str) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with job_id.

    Example:
        with job_context("1700000000000-abc123"):
            logger.info("Polling")  # Record carries job_id
    """
    token = _job_id.set(job_id)
    try:
        yield
    finally:
        _job_id.reset(token)


class JobContextFilter(logging.Filter):
    """Logging filter that injects the job context into log records.

    Adds job_id for JSON output and a compact job_tag ("[job 123] ")
    for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id = get_job_context()
        record.job_id = job_id
        record.job_tag = f"[job {job_id}] " if job_id else ""
        return True  # Never filter out records
