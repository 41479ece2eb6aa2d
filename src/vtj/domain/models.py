"""Domain models for Video Transcode Job.

These models describe the source file, the planned output and the overlay
placements. They are independent of the MediaConvert wire format, which is
rendered by vtj.planning.assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction

from vtj.domain.enums import OverlayMode

# Fallback values used when the source cannot be probed.
DEFAULT_DURATION_MS = 15000
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
DEFAULT_BITRATE_BPS = 5_000_000
DEFAULT_COLOR_SPACE = "unknown"


@dataclass(frozen=True)
class SourceProbe:
    """Measured properties of a source video (domain model).

    Width and height are the raw stream dimensions as stored in the file.
    Use upright() before planning so that rotated sources describe the
    frame as it is displayed.
    """

    duration_ms: int
    width: int
    height: int
    bitrate_bps: int = 0
    rotation_degrees: int = 0
    color_space: str = DEFAULT_COLOR_SPACE
    probed: bool = True  # False when values are the documented fallbacks

    @classmethod
    def defaults(cls) -> SourceProbe:
        """Return the fallback probe used when metadata is unavailable."""
        return cls(
            duration_ms=DEFAULT_DURATION_MS,
            width=DEFAULT_WIDTH,
            height=DEFAULT_HEIGHT,
            bitrate_bps=DEFAULT_BITRATE_BPS,
            rotation_degrees=0,
            color_space=DEFAULT_COLOR_SPACE,
            probed=False,
        )

    @property
    def is_quarter_turn(self) -> bool:
        """True if the rotation is an odd multiple of 90 degrees."""
        return self.rotation_degrees % 180 == 90

    def upright(self) -> SourceProbe:
        """Return a copy with width/height swapped for quarter-turn rotations."""
        if not self.is_quarter_turn:
            return self
        return replace(self, width=self.height, height=self.width)


@dataclass(frozen=True)
class OutputGeometry:
    """Planned output frame size.

    Both dimensions are even. scale_factor is the exact ratio actually
    applied after even-rounding, which is what bitrate scaling must use.
    """

    width: int
    height: int
    scale_factor: Fraction

    @property
    def long_edge(self) -> int:
        return max(self.width, self.height)

    @property
    def short_edge(self) -> int:
        return min(self.width, self.height)


@dataclass(frozen=True)
class OverlayPlacement:
    """One watermark image insertion.

    start_ms and duration_ms are None for static placements, which cover
    the whole video.
    """

    layer_index: int
    x: int
    y: int
    size_px: int
    opacity_percent: int
    asset_ref: str
    start_ms: int | None = None
    duration_ms: int | None = None

    @property
    def end_ms(self) -> int | None:
        if self.start_ms is None or self.duration_ms is None:
            return None
        return self.start_ms + self.duration_ms


@dataclass(frozen=True)
class JobPlan:
    """Everything needed to describe one transcode job submission."""

    input_uri: str
    source: SourceProbe
    geometry: OutputGeometry
    bitrate_bps: int
    overlays: tuple[OverlayPlacement, ...]
    overlay_mode: OverlayMode
    name_modifier: str
    destination: str
    container: str = "MP4"
