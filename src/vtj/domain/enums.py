"""Domain enums for Video Transcode Job.

This module contains enums shared by the planner, the remote service
adapter and the job lifecycle monitor.
"""

from enum import Enum


class JobStatus(Enum):
    """Lifecycle status of a remote transcode job.

    Values match the status strings reported by MediaConvert. Statuses the
    service reports that are not listed here map to UNKNOWN.
    """

    SUBMITTED = "SUBMITTED"
    PROGRESSING = "PROGRESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"
    CANCELED = "CANCELED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_remote(cls, value: str | None) -> "JobStatus":
        """Map a remote status string to a JobStatus (UNKNOWN if unrecognized)."""
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        """True for statuses from which no further transition occurs."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {JobStatus.COMPLETE, JobStatus.ERROR, JobStatus.CANCELED}
)


class OverlayMode(Enum):
    """How watermark placements are laid out over the video."""

    LOOPING = "looping"  # Timed placements alternating between corners
    STATIC = "static"  # Two full-length placements, one per corner
