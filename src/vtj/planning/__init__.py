"""Transcode planning.

Pure functions that turn source metadata into output geometry, bitrate and
watermark placements, plus the assembler that renders and submits a plan.
"""

from vtj.planning.assembler import (
    assemble_plan,
    build_job_description,
    probe_source,
    submit_plan,
)
from vtj.planning.bitrate import MAX_BITRATE_BPS, plan_bitrate
from vtj.planning.exceptions import PlanningError
from vtj.planning.geometry import MAX_LONG_EDGE, ensure_even, plan_geometry
from vtj.planning.overlay import (
    calculate_offset,
    calculate_size,
    generate_overlays,
    ms_to_timecode,
    placement_to_insertable_image,
    select_overlay_mode,
)

__all__ = [
    "MAX_BITRATE_BPS",
    "MAX_LONG_EDGE",
    "PlanningError",
    "assemble_plan",
    "build_job_description",
    "calculate_offset",
    "calculate_size",
    "ensure_even",
    "generate_overlays",
    "ms_to_timecode",
    "placement_to_insertable_image",
    "plan_bitrate",
    "plan_geometry",
    "probe_source",
    "select_overlay_mode",
    "submit_plan",
]
