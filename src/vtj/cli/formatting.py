"""Output formatting for job plans and job results."""

import json
from typing import Any

from vtj.domain.models import JobPlan, OverlayPlacement
from vtj.jobs.monitor import MonitorResult


def format_placement_line(placement: OverlayPlacement) -> str:
    """Format a single watermark placement for human output."""
    parts = [
        f"#{placement.layer_index}",
        f"({placement.x}, {placement.y})",
        f"{placement.size_px}px",
    ]
    if placement.start_ms is None:
        parts.append("whole video")
    else:
        parts.append(f"{placement.start_ms}-{placement.end_ms} ms")
    return " ".join(parts)


def format_plan_human(plan: JobPlan) -> str:
    """Format a job plan for human-readable output.

    Args:
        plan: The plan to format.

    Returns:
        Formatted string for terminal output.
    """
    source = plan.source
    geometry = plan.geometry
    lines: list[str] = []

    lines.append(f"Input: {plan.input_uri}")
    source_line = (
        f"Source: {source.width}x{source.height}, {source.duration_ms} ms, "
        f"{source.bitrate_bps} bps, {source.color_space}"
    )
    if source.rotation_degrees:
        source_line += f", rotated {source.rotation_degrees}"
    if not source.probed:
        source_line += " (defaults, metadata unavailable)"
    lines.append(source_line)
    lines.append("")

    lines.append(
        f"Output: {geometry.width}x{geometry.height} "
        f"(scale {float(geometry.scale_factor):.3f})"
    )
    lines.append(f"Bitrate: {plan.bitrate_bps} bps (max)")
    lines.append(f"Destination: {plan.destination}")
    lines.append(f"Name modifier: {plan.name_modifier}")
    lines.append("")

    lines.append(
        f"Watermark: {plan.overlay_mode.value}, {len(plan.overlays)} placements"
    )
    for placement in plan.overlays:
        lines.append(f"  {format_placement_line(placement)}")

    return "\n".join(lines)


def plan_to_dict(plan: JobPlan) -> dict[str, Any]:
    """Convert a JobPlan to a JSON-serializable dict."""
    return {
        "input_uri": plan.input_uri,
        "source": {
            "duration_ms": plan.source.duration_ms,
            "width": plan.source.width,
            "height": plan.source.height,
            "bitrate_bps": plan.source.bitrate_bps,
            "rotation_degrees": plan.source.rotation_degrees,
            "color_space": plan.source.color_space,
            "probed": plan.source.probed,
        },
        "output": {
            "width": plan.geometry.width,
            "height": plan.geometry.height,
            "scale_factor": str(plan.geometry.scale_factor),
            "bitrate_bps": plan.bitrate_bps,
        },
        "overlay_mode": plan.overlay_mode.value,
        "overlays": [
            {
                "layer": p.layer_index,
                "x": p.x,
                "y": p.y,
                "size_px": p.size_px,
                "opacity_percent": p.opacity_percent,
                "start_ms": p.start_ms,
                "duration_ms": p.duration_ms,
            }
            for p in plan.overlays
        ],
        "name_modifier": plan.name_modifier,
        "destination": plan.destination,
        "container": plan.container,
    }


def format_plan_json(plan: JobPlan, description: dict[str, Any]) -> str:
    """Format a plan and its rendered job description as JSON."""
    data = {"plan": plan_to_dict(plan), "job_description": description}
    return json.dumps(data, indent=2)


def format_result_human(result: MonitorResult) -> str:
    lines = [
        f"Job {result.job_id}: {result.status.value} "
        f"({int(result.elapsed_seconds)}s)"
    ]
    if result.output_uri:
        label = "Output file" if result.output_uri_exact else "Output location"
        lines.append(f"{label}: {result.output_uri}")
    return "\n".join(lines)
