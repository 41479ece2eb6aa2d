"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Target/file errors
    40-49: Job operation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for vtj CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    CONFIG_ERROR = 11
    PLANNING_ERROR = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Job operation errors (40-49)
    SUBMISSION_FAILED = 40
    JOB_FAILED = 41
    JOB_CANCELED = 42
    TRANSFER_FAILED = 43
    MONITOR_ABORTED = 44
