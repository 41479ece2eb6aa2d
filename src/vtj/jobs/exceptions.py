"""Custom exceptions for transcode job monitoring.

This module provides specific exception types for the job lifecycle,
enabling callers to handle different outcomes appropriately.
"""


class TranscodeJobError(Exception):
    """Base exception for transcode job errors.

    All job lifecycle exceptions inherit from this class, allowing callers
    to catch all job errors with a single except clause if desired.

    Attributes:
        job_id: The ID of the remote job.
    """

    def __init__(self, job_id: str, message: str) -> None:
        self.job_id = job_id
        super().__init__(message)


class JobFailedError(TranscodeJobError):
    """Raised when the remote job ends in the ERROR state.

    Attributes:
        job_id: The ID of the failed job.
        error_code: Service error code, if reported.
        error_message: Service error message, if reported.
    """

    def __init__(
        self,
        job_id: str,
        error_code: int | None = None,
        error_message: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            job_id: The ID of the failed job.
            error_code: Service error code, if reported.
            error_message: Service error message, if reported.
        """
        self.error_code = error_code
        self.error_message = error_message
        detail = error_message or "Unknown error"
        if error_code is not None:
            detail = f"{detail} (code {error_code})"
        super().__init__(job_id, f"Job {job_id} failed: {detail}")


class JobCanceledError(TranscodeJobError):
    """Raised when the remote job was canceled."""

    def __init__(self, job_id: str) -> None:
        super().__init__(job_id, f"Job {job_id} was canceled")


class PollRetryExhaustedError(TranscodeJobError):
    """Raised when too many consecutive status polls failed.

    Attributes:
        job_id: The ID of the monitored job.
        attempts: Number of consecutive failed polls.
    """

    def __init__(self, job_id: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            job_id,
            f"Giving up on job {job_id} after {attempts} consecutive poll errors",
        )


class MonitorCancelledError(TranscodeJobError):
    """Raised when monitoring is stopped through JobMonitor.cancel().

    The remote job itself is not affected.
    """

    def __init__(self, job_id: str) -> None:
        super().__init__(job_id, f"Monitoring of job {job_id} was cancelled")
