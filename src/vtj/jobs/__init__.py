"""Transcode job lifecycle.

Monitors remote jobs to a terminal state and locates their output.
"""

from vtj.jobs.exceptions import (
    JobCanceledError,
    JobFailedError,
    MonitorCancelledError,
    PollRetryExhaustedError,
    TranscodeJobError,
)
from vtj.jobs.monitor import (
    JobMonitor,
    LoggingMonitorListener,
    MonitorListener,
    MonitorResult,
    MonitorSession,
    NullMonitorListener,
    classify_status,
)
from vtj.jobs.output import (
    OutputUriError,
    reconstruct_output_uri,
    resolve_output_location,
)

__all__ = [
    "JobCanceledError",
    "JobFailedError",
    "JobMonitor",
    "LoggingMonitorListener",
    "MonitorCancelledError",
    "MonitorListener",
    "MonitorResult",
    "MonitorSession",
    "NullMonitorListener",
    "OutputUriError",
    "PollRetryExhaustedError",
    "TranscodeJobError",
    "classify_status",
    "reconstruct_output_uri",
    "resolve_output_location",
]
