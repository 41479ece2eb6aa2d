"""Job lifecycle monitor.

This module polls a remote transcode job until it reaches a terminal state:
- Transition events on every status change, progress events while encoding
- Bounded retries for transient poll failures
- Output URI reconstruction once the job completes
- Cooperative cancellation from another thread
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from vtj.domain.enums import JobStatus
from vtj.jobs.exceptions import (
    JobCanceledError,
    JobFailedError,
    MonitorCancelledError,
    PollRetryExhaustedError,
)
from vtj.jobs.output import resolve_output_location
from vtj.logging import job_context
from vtj.remote.interface import RemoteJobService
from vtj.remote.models import RemoteJob

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0  # seconds
DEFAULT_PROGRESS_INTERVAL = 10  # seconds
DEFAULT_MAX_POLL_ERRORS = 12


@dataclass
class MonitorSession:
    """Polling state for one monitored job.

    Created by JobMonitor.run() and owned by that call only.
    """

    job_id: str
    started_at: float
    last_status: JobStatus | None = None
    last_progress_log_at: float = 0.0  # elapsed seconds
    last_percent: int | None = None
    consecutive_errors: int = 0
    last_job: RemoteJob | None = None


@dataclass(frozen=True)
class MonitorResult:
    """Outcome of a job that completed successfully."""

    job_id: str
    status: JobStatus
    job: RemoteJob
    output_uri: str | None
    output_uri_exact: bool
    elapsed_seconds: float


def classify_status(status: JobStatus) -> bool:
    """Return True if the status ends monitoring."""
    return status.is_terminal


class MonitorListener(Protocol):
    """Protocol for receiving monitor events.

    Implementations provide context-specific reporting:
    - CLI: log lines through the logging module
    - Tests: null/silent listener
    """

    def on_transition(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        """Called once for every status change, including the first poll.

        Args:
            session: Current session; last_status is already the new status.
            job: The snapshot that reported the new status.
            elapsed: Seconds since monitoring started.
        """
        ...

    def on_progress(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        """Called periodically while the job stays PROGRESSING."""
        ...

    def on_poll_error(
        self, session: MonitorSession, error: Exception, max_errors: int
    ) -> None:
        """Called after a failed poll, before the retry delay.

        Args:
            session: Current session; consecutive_errors is already updated.
            error: The exception raised by the poll.
            max_errors: Failure count at which monitoring gives up.
        """
        ...


class NullMonitorListener:
    """Listener that ignores all events."""

    def on_transition(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        pass

    def on_progress(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        pass

    def on_poll_error(
        self, session: MonitorSession, error: Exception, max_errors: int
    ) -> None:
        pass


class LoggingMonitorListener:
    """Listener that reports job progress through the logging module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def on_transition(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        status = job.status
        if status is JobStatus.SUBMITTED:
            self._log.info("Job submitted (%ds elapsed)", elapsed)
        elif status is JobStatus.PROGRESSING:
            self._log.info("Job progressing (%ds elapsed)", elapsed)
            if job.current_phase:
                self._log.info("Current phase: %s", job.current_phase)
        elif status is JobStatus.COMPLETE:
            self._log.info("Job completed successfully (%ds total)", elapsed)
        elif status is JobStatus.ERROR:
            self._log.error(
                "Job failed: %s (error code: %s)",
                job.error_message or "Unknown error",
                job.error_code,
            )
        elif status is JobStatus.CANCELED:
            self._log.warning("Job was canceled (%ds elapsed)", elapsed)
        else:
            self._log.info("Job status unknown (%ds elapsed)", elapsed)

    def on_progress(
        self, session: MonitorSession, job: RemoteJob, elapsed: float
    ) -> None:
        parts = [f"Processing ({int(elapsed)}s elapsed)"]
        if job.percent_complete is not None:
            parts.append(f"{job.percent_complete}% complete")
        if job.current_phase:
            parts.append(f"phase: {job.current_phase}")
        self._log.info(" - ".join(parts))

    def on_poll_error(
        self, session: MonitorSession, error: Exception, max_errors: int
    ) -> None:
        self._log.warning(
            "Error polling job status (%d/%d): %s",
            session.consecutive_errors,
            max_errors,
            error,
        )


class JobMonitor:
    """Polls a remote job until it completes, fails or is canceled."""

    def __init__(
        self,
        service: RemoteJobService,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        progress_interval: float = DEFAULT_PROGRESS_INTERVAL,
        max_poll_errors: int = DEFAULT_MAX_POLL_ERRORS,
        sleep: Callable[[float], object] | None = None,
        clock: Callable[[], float] = time.monotonic,
        listener: MonitorListener | None = None,
        fallback_location: str | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            service: Remote service used to fetch job state.
            poll_interval: Seconds to wait between polls.
            progress_interval: Minimum seconds between periodic progress events.
            max_poll_errors: Consecutive failed polls tolerated before giving up.
            sleep: Delay function. Defaults to a wait that cancel() interrupts.
            clock: Monotonic clock used for elapsed time.
            listener: Event listener (default: LoggingMonitorListener).
            fallback_location: Output prefix reported when the exact output
                URI cannot be determined.
        """
        if max_poll_errors < 1:
            raise ValueError(
                f"max_poll_errors must be at least 1, got {max_poll_errors}"
            )
        self._service = service
        self._poll_interval = poll_interval
        self._progress_interval = progress_interval
        self._max_poll_errors = max_poll_errors
        self._cancelled = threading.Event()
        self._sleep = sleep or self._cancelled.wait
        self._clock = clock
        self._listener = listener or LoggingMonitorListener()
        self._fallback_location = fallback_location

    def cancel(self) -> None:
        """Stop monitoring before the next poll. Safe to call from any thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def run(self, job_id: str) -> MonitorResult:
        """Monitor a job to its terminal state.

        Args:
            job_id: Remote job id.

        Returns:
            MonitorResult for a COMPLETE job.

        Raises:
            JobFailedError: If the job ended in ERROR.
            JobCanceledError: If the job was canceled.
            PollRetryExhaustedError: If max_poll_errors consecutive polls failed.
            MonitorCancelledError: If cancel() was called.
        """
        session = MonitorSession(job_id=job_id, started_at=self._clock())

        with job_context(job_id):
            logger.info("Monitoring job %s", job_id)
            while True:
                if self._cancelled.is_set():
                    logger.info("Monitoring cancelled")
                    raise MonitorCancelledError(job_id)

                try:
                    job = self._service.get_job(job_id)
                    self._observe(session, job)
                except Exception as e:
                    if (
                        session.last_status is JobStatus.COMPLETE
                        and session.last_job is not None
                    ):
                        logger.warning(
                            "Error after job completed, using last known state: %s", e
                        )
                        return self._complete(session, session.last_job)

                    session.consecutive_errors += 1
                    self._listener.on_poll_error(session, e, self._max_poll_errors)
                    if session.consecutive_errors >= self._max_poll_errors:
                        raise PollRetryExhaustedError(
                            job_id, session.consecutive_errors
                        ) from e
                else:
                    session.consecutive_errors = 0
                    if classify_status(job.status):
                        return self._finish(session, job)

                self._sleep(self._poll_interval)

    def _elapsed(self, session: MonitorSession) -> float:
        return self._clock() - session.started_at

    def _observe(self, session: MonitorSession, job: RemoteJob) -> None:
        """Record a snapshot and emit the events it warrants.

        Session state is updated before listeners run, so a listener error
        never hides a status the service already reported.
        """
        elapsed = self._elapsed(session)
        previous_status = session.last_status
        previous_percent = session.last_percent

        session.last_status = job.status
        session.last_job = job
        if job.percent_complete is not None:
            session.last_percent = job.percent_complete

        if job.status is not previous_status:
            self._listener.on_transition(session, job, elapsed)
            return

        if job.status is JobStatus.PROGRESSING:
            percent_changed = (
                job.percent_complete is not None
                and job.percent_complete != previous_percent
            )
            due = elapsed - session.last_progress_log_at >= self._progress_interval
            if due or percent_changed:
                session.last_progress_log_at = elapsed
                self._listener.on_progress(session, job, elapsed)

    def _finish(self, session: MonitorSession, job: RemoteJob) -> MonitorResult:
        if job.status is JobStatus.ERROR:
            raise JobFailedError(session.job_id, job.error_code, job.error_message)
        if job.status is JobStatus.CANCELED:
            raise JobCanceledError(session.job_id)
        return self._complete(session, job)

    def _complete(self, session: MonitorSession, job: RemoteJob) -> MonitorResult:
        output_uri, exact = resolve_output_location(job, self._fallback_location)
        if exact:
            logger.info("Output file: %s", output_uri)
        else:
            logger.info("Output location: %s", output_uri)
        return MonitorResult(
            job_id=session.job_id,
            status=job.status,
            job=job,
            output_uri=output_uri,
            output_uri_exact=exact,
            elapsed_seconds=self._elapsed(session),
        )
