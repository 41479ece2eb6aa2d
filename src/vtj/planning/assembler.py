"""Job plan assembly and submission.

Combines geometry, bitrate and overlay planning into an immutable JobPlan,
renders the plan as a MediaConvert job description and submits it.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vtj.domain.models import JobPlan, SourceProbe
from vtj.introspector.interface import MediaIntrospectionError, MediaIntrospector
from vtj.planning.bitrate import plan_bitrate
from vtj.planning.exceptions import PlanningError
from vtj.planning.geometry import plan_geometry
from vtj.planning.overlay import (
    generate_overlays,
    placement_to_insertable_image,
    select_overlay_mode,
)

if TYPE_CHECKING:
    from vtj.config.models import MediaConvertConfig, PlanningConfig, StorageConfig
    from vtj.remote.interface import RemoteJobService

logger = logging.getLogger(__name__)

AUDIO_SELECTOR = "Audio Selector 1"
AUDIO_BITRATE_BPS = 128_000
AUDIO_SAMPLE_RATE = 48_000
MIN_SOURCE_DIMENSION = 2


def probe_source(path: Path, introspector: MediaIntrospector) -> SourceProbe:
    """Probe a source file, falling back to default metadata on failure.

    Args:
        path: Local path of the source video.
        introspector: Introspector used to read the metadata.

    Returns:
        The measured SourceProbe, or SourceProbe.defaults() if probing failed.
    """
    try:
        return introspector.get_source_probe(path)
    except MediaIntrospectionError as e:
        defaults = SourceProbe.defaults()
        logger.warning(
            "Could not read metadata for %s, using defaults "
            "(%dx%d, %d ms, %d bps): %s",
            path,
            defaults.width,
            defaults.height,
            defaults.duration_ms,
            defaults.bitrate_bps,
            e,
        )
        return defaults


def assemble_plan(
    input_uri: str,
    probe: SourceProbe,
    planning: PlanningConfig,
    storage: StorageConfig,
    *,
    now_ms: int | None = None,
) -> JobPlan:
    """Build the job plan for one source.

    Args:
        input_uri: S3 URI of the uploaded source.
        probe: Source metadata (raw stream dimensions and rotation).
        planning: Planning limits and overlay settings.
        storage: Storage settings (output prefix, watermark location).
        now_ms: Submission time in epoch milliseconds. Defaults to now.

    Returns:
        Immutable JobPlan.

    Raises:
        PlanningError: If the upright source, or the scaled output, is smaller
            than 2x2 pixels or the overlay settings are invalid.
    """
    upright = probe.upright()
    if upright.width < MIN_SOURCE_DIMENSION or upright.height < MIN_SOURCE_DIMENSION:
        raise PlanningError(
            f"Source dimensions {upright.width}x{upright.height} are too small "
            f"(minimum {MIN_SOURCE_DIMENSION}x{MIN_SOURCE_DIMENSION})"
        )

    geometry = plan_geometry(upright.width, upright.height, planning.max_long_edge)
    if geometry.width < MIN_SOURCE_DIMENSION or geometry.height < MIN_SOURCE_DIMENSION:
        raise PlanningError(
            f"Output dimensions {geometry.width}x{geometry.height} for source "
            f"{upright.width}x{upright.height} are too small "
            f"(minimum {MIN_SOURCE_DIMENSION}x{MIN_SOURCE_DIMENSION})"
        )
    bitrate = plan_bitrate(
        upright.bitrate_bps,
        geometry.scale_factor,
        cap_bps=planning.max_bitrate_bps,
        default_bps=planning.default_bitrate_bps,
    )
    overlays = generate_overlays(
        geometry,
        upright.duration_ms,
        upright.color_space,
        asset_ref=storage.watermark_uri,
        opacity_percent=planning.overlay_opacity,
        per_corner_ms=planning.overlay_corner_ms,
    )

    if now_ms is None:
        now_ms = int(time.time() * 1000)

    plan = JobPlan(
        input_uri=input_uri,
        source=upright,
        geometry=geometry,
        bitrate_bps=bitrate,
        overlays=tuple(overlays),
        overlay_mode=select_overlay_mode(upright.color_space),
        name_modifier=f"_{now_ms}",
        destination=storage.output_prefix,
    )

    logger.info(
        "Planned %s: %dx%d -> %dx%d, %d bps, %d watermark placements (%s)",
        input_uri,
        upright.width,
        upright.height,
        geometry.width,
        geometry.height,
        bitrate,
        len(plan.overlays),
        plan.overlay_mode.value,
    )
    return plan


def _video_description(plan: JobPlan) -> dict[str, Any]:
    return {
        "Width": plan.geometry.width,
        "Height": plan.geometry.height,
        "CodecSettings": {
            "Codec": "H_264",
            "H264Settings": {
                "MaxBitrate": plan.bitrate_bps,
                "RateControlMode": "QVBR",
                "QualityTuningLevel": "SINGLE_PASS_HQ",
                "SceneChangeDetect": "TRANSITION_DETECTION",
            },
        },
        "VideoPreprocessors": {
            "ImageInserter": {
                "InsertableImages": [
                    placement_to_insertable_image(p) for p in plan.overlays
                ],
            },
        },
    }


def build_job_description(
    plan: JobPlan, mediaconvert: MediaConvertConfig
) -> dict[str, Any]:
    """Render a plan as CreateJob keyword arguments.

    Args:
        plan: The job plan.
        mediaconvert: MediaConvert settings (role and queue).

    Returns:
        Dictionary suitable for ``client.create_job(**description)``.
    """
    description: dict[str, Any] = {"Role": mediaconvert.role_arn}
    if mediaconvert.queue_arn:
        description["Queue"] = mediaconvert.queue_arn
    # 10 seconds is the shortest interval MediaConvert supports
    description["StatusUpdateInterval"] = "SECONDS_10"

    description["Settings"] = {
        "Inputs": [
            {
                "FileInput": plan.input_uri,
                "VideoSelector": {
                    "Rotate": "AUTO",
                    "ColorSpace": "REC_709",
                    "ColorSpaceUsage": "FORCE",
                },
                "AudioSelectors": {
                    AUDIO_SELECTOR: {"DefaultSelection": "DEFAULT"},
                },
            }
        ],
        "OutputGroups": [
            {
                "Name": "File Group",
                "OutputGroupSettings": {
                    "Type": "FILE_GROUP_SETTINGS",
                    "FileGroupSettings": {"Destination": plan.destination},
                },
                "Outputs": [
                    {
                        "VideoDescription": _video_description(plan),
                        "AudioDescriptions": [
                            {
                                "AudioSourceName": AUDIO_SELECTOR,
                                "CodecSettings": {
                                    "Codec": "AAC",
                                    "AacSettings": {
                                        "Bitrate": AUDIO_BITRATE_BPS,
                                        "CodingMode": "CODING_MODE_2_0",
                                        "SampleRate": AUDIO_SAMPLE_RATE,
                                    },
                                },
                            }
                        ],
                        "ContainerSettings": {
                            "Container": plan.container,
                            "Mp4Settings": {},
                        },
                        "NameModifier": plan.name_modifier,
                    }
                ],
            }
        ],
        "TimecodeConfig": {"Source": "ZEROBASED"},
    }
    return description


def submit_plan(
    plan: JobPlan, service: RemoteJobService, mediaconvert: MediaConvertConfig
) -> str:
    """Submit a plan to the remote service.

    Submission is attempted exactly once.

    Returns:
        The remote job id.

    Raises:
        SubmissionError: If the service rejects the job.
    """
    description = build_job_description(plan, mediaconvert)
    logger.debug(
        "Submitting job for %s with %d insertable images",
        plan.input_uri,
        len(plan.overlays),
    )
    job_id = service.create_job(description)
    logger.info("Submitted transcode job %s for %s", job_id, plan.input_uri)
    return job_id
