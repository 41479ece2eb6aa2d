"""Watermark overlay sequence generation.

Produces the list of image insertions that keep a watermark on screen for
the whole video. The default layout alternates the watermark between the
top-left and bottom-right corners. Sources in the yuv420p family get two
static full-length placements instead, because MediaConvert's image
inserter rejects timed insertions combined with those pixel formats.
"""

import logging
import math
from fractions import Fraction
from typing import Any

from vtj.domain.enums import OverlayMode
from vtj.domain.models import OutputGeometry, OverlayPlacement
from vtj.planning.exceptions import PlanningError

logger = logging.getLogger(__name__)

SIZE_PERCENT = 10
MIN_SIZE_PX = 80
MIN_OFFSET_PX = 20
OFFSET_PERCENT_RANGE = (3, 5)
PER_CORNER_MS = 5000
DEFAULT_OPACITY = 80

# Pixel formats that must use static placements
STATIC_COLOR_SPACES = frozenset({"yuv420p10le", "yuv420p", "yuvj420p"})


def calculate_size(geometry: OutputGeometry) -> int:
    """Watermark edge length: 10% of the short edge, at least 80 px."""
    return max(geometry.short_edge * SIZE_PERCENT // 100, MIN_SIZE_PX)


def calculate_offset(geometry: OutputGeometry) -> int:
    """Distance from the frame edges: 3-5% of the short edge, at least 20 px."""
    short_edge = geometry.short_edge
    low, high = OFFSET_PERCENT_RANGE
    percent = max(Fraction(low), min(Fraction(high), Fraction(short_edge, 400)))
    return max(math.floor(short_edge * percent / 100), MIN_OFFSET_PX)


def select_overlay_mode(color_space: str | None) -> OverlayMode:
    """Choose static placement for incompatible pixel formats."""
    if color_space is not None and color_space.casefold() in STATIC_COLOR_SPACES:
        return OverlayMode.STATIC
    return OverlayMode.LOOPING


def corner_positions(
    geometry: OutputGeometry, size: int, offset: int
) -> list[tuple[int, int]]:
    """Top-left and bottom-right watermark positions, clamped to the frame."""
    return [
        (offset, offset),
        (
            max(geometry.width - size - offset, 0),
            max(geometry.height - size - offset, 0),
        ),
    ]


def generate_overlays(
    geometry: OutputGeometry,
    duration_ms: int,
    color_space: str | None,
    *,
    asset_ref: str,
    opacity_percent: int = DEFAULT_OPACITY,
    per_corner_ms: int = PER_CORNER_MS,
) -> list[OverlayPlacement]:
    """Generate the watermark placements for a video.

    Args:
        geometry: Output geometry the placements are positioned in.
        duration_ms: Source duration in milliseconds.
        color_space: Source pixel format (ffprobe pix_fmt).
        asset_ref: S3 URI of the watermark image.
        opacity_percent: Watermark opacity (0-100).
        per_corner_ms: How long the watermark stays in each corner.

    Returns:
        Placements ordered by start time with ascending layer indexes.

    Raises:
        PlanningError: If per_corner_ms is not a positive whole number of
            seconds.
    """
    size = calculate_size(geometry)
    offset = calculate_offset(geometry)
    positions = corner_positions(geometry, size, offset)
    mode = select_overlay_mode(color_space)

    logger.debug(
        "Watermark layout: mode=%s size=%dpx offset=%dpx color_space=%s",
        mode.value,
        size,
        offset,
        color_space,
    )

    if mode is OverlayMode.STATIC:
        return [
            OverlayPlacement(
                layer_index=layer,
                x=x,
                y=y,
                size_px=size,
                opacity_percent=opacity_percent,
                asset_ref=asset_ref,
            )
            for layer, (x, y) in enumerate(positions)
        ]

    if per_corner_ms <= 0:
        raise PlanningError(f"per_corner_ms must be positive, got {per_corner_ms}")
    # StartTime timecodes only carry whole seconds
    if per_corner_ms % 1000:
        raise PlanningError(
            f"per_corner_ms must be a whole number of seconds, got {per_corner_ms}"
        )

    cycle_ms = per_corner_ms * len(positions)
    cycles = math.ceil(duration_ms / cycle_ms) if duration_ms > 0 else 0
    placements: list[OverlayPlacement] = []

    for cycle in range(cycles):
        for corner, (x, y) in enumerate(positions):
            start_ms = cycle * cycle_ms + corner * per_corner_ms
            if start_ms >= duration_ms:
                continue
            placements.append(
                OverlayPlacement(
                    layer_index=len(placements),
                    x=x,
                    y=y,
                    size_px=size,
                    opacity_percent=opacity_percent,
                    asset_ref=asset_ref,
                    start_ms=start_ms,
                    duration_ms=min(per_corner_ms, duration_ms - start_ms),
                )
            )

    return placements


def ms_to_timecode(ms: int) -> str:
    """Render milliseconds as a MediaConvert timecode (HH:MM:SS:FF).

    Sub-second precision is dropped and the frame field is always 00.
    """
    total_seconds = ms // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}:00"


def placement_to_insertable_image(placement: OverlayPlacement) -> dict[str, Any]:
    """Render a placement as a MediaConvert InsertableImage.

    Duration stays integer milliseconds; only StartTime uses a timecode.
    Static placements carry neither, so they span the whole output.
    """
    image: dict[str, Any] = {
        "ImageInserterInput": placement.asset_ref,
        "Layer": placement.layer_index,
        "Opacity": placement.opacity_percent,
        "Width": placement.size_px,
        "Height": placement.size_px,
        "ImageX": placement.x,
        "ImageY": placement.y,
    }
    if placement.start_ms is not None and placement.duration_ms is not None:
        image["StartTime"] = ms_to_timecode(placement.start_ms)
        image["Duration"] = placement.duration_ms
    return image
