"""Domain models and enums for Video Transcode Job.

- Domain models: SourceProbe, OutputGeometry, OverlayPlacement, JobPlan
- Domain enums: JobStatus, OverlayMode

Usage:
    from vtj.domain import SourceProbe, JobStatus
"""

from .enums import TERMINAL_STATUSES, JobStatus, OverlayMode
from .models import (
    DEFAULT_BITRATE_BPS,
    JobPlan,
    OutputGeometry,
    OverlayPlacement,
    SourceProbe,
)

__all__ = [
    # Models
    "SourceProbe",
    "OutputGeometry",
    "OverlayPlacement",
    "JobPlan",
    "DEFAULT_BITRATE_BPS",
    # Enums
    "JobStatus",
    "OverlayMode",
    "TERMINAL_STATUSES",
]
