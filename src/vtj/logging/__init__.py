"""Structured logging module for vtj.

Provides configurable logging with JSON format support, file rotation and
per-job context tagging.
"""

from vtj.logging.config import configure_logging
from vtj.logging.context import JobContextFilter, get_job_context, job_context
from vtj.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "configure_logging",
    "get_job_context",
    "job_context",
]
