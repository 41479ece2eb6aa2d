"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON data into a SourceProbe.
All functions are pure (no I/O, no side effects) for easy testing.
"""

import logging
from pathlib import Path

from vtj.domain.models import DEFAULT_COLOR_SPACE, SourceProbe
from vtj.introspector.interface import MediaIntrospectionError

logger = logging.getLogger(__name__)


def _log_validation_warning(
    message: str,
    field_name: str,
    file_path: str | None,
    *args: object,
) -> None:
    """Log a validation warning with optional file context."""
    context = f" in {file_path}" if file_path else ""
    logger.warning(f"{message}{context}", field_name, *args)


def parse_int(
    value: object,
    field_name: str,
    file_path: str | None = None,
) -> int | None:
    """Parse an ffprobe numeric field into a non-negative integer.

    ffprobe reports most numbers as strings ("4000000"), some as ints.

    Args:
        value: Raw value from ffprobe JSON.
        field_name: Field name for warning messages.
        file_path: File path context for warnings.

    Returns:
        Parsed value or None if missing or invalid.
    """
    if value is None or value == "N/A":
        return None
    try:
        parsed = int(float(value))
    except (TypeError, ValueError):
        _log_validation_warning(
            "Expected number for %s, got %r", field_name, file_path, value
        )
        return None
    if parsed < 0:
        _log_validation_warning(
            "Invalid negative %s: %d", field_name, file_path, parsed
        )
        return None
    return parsed


def parse_duration_ms(value: str | None) -> int | None:
    """Parse duration string from ffprobe (seconds) into milliseconds.

    Args:
        value: Duration string from ffprobe (e.g., "12.345000") or None.

    Returns:
        Duration in whole milliseconds (floored), or None if parsing fails.
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except (ValueError, TypeError):
        return None
    if seconds < 0:
        return None
    return int(seconds * 1000)


def parse_rotation(stream: dict) -> int:
    """Extract the display rotation of a video stream in degrees.

    Older ffprobe builds report a "rotate" tag; newer ones report a
    "Display Matrix" side data entry with a "rotation" field.

    Args:
        stream: Video stream dictionary from ffprobe JSON.

    Returns:
        Rotation in degrees (0 if not present).
    """
    tags = stream.get("tags") or {}
    rotate = tags.get("rotate")
    if rotate is not None:
        try:
            return int(float(rotate))
        except (TypeError, ValueError):
            logger.debug("Ignoring unparseable rotate tag: %r", rotate)

    for side_data in stream.get("side_data_list") or []:
        if "rotation" in side_data:
            try:
                return int(float(side_data["rotation"]))
            except (TypeError, ValueError):
                logger.debug(
                    "Ignoring unparseable rotation side data: %r",
                    side_data["rotation"],
                )
    return 0


def find_video_stream(streams: list[dict]) -> dict | None:
    """Return the first video stream that is not an attached picture."""
    for stream in streams:
        if stream.get("codec_type") != "video":
            continue
        disposition = stream.get("disposition") or {}
        if disposition.get("attached_pic", 0) == 1:
            continue
        return stream
    return None


def parse_ffprobe_output(path: Path, data: dict) -> SourceProbe:
    """Build a SourceProbe from ffprobe JSON output.

    Args:
        path: Path of the probed file (used in messages only).
        data: Parsed ffprobe JSON with "streams" and "format".

    Returns:
        SourceProbe with raw stream dimensions.

    Raises:
        MediaIntrospectionError: If there is no usable video stream.
    """
    file_path = str(path)
    video = find_video_stream(data.get("streams", []))
    if video is None:
        raise MediaIntrospectionError(f"No video stream found in {path}")

    width = parse_int(video.get("width"), "width", file_path)
    height = parse_int(video.get("height"), "height", file_path)
    if not width or not height:
        raise MediaIntrospectionError(f"Video stream in {path} has no dimensions")

    fmt = data.get("format", {})
    duration_ms = parse_duration_ms(fmt.get("duration"))
    if duration_ms is None:
        duration_ms = parse_duration_ms(video.get("duration"))
    if duration_ms is None:
        raise MediaIntrospectionError(f"Could not determine duration of {path}")

    # Prefer the video stream bitrate, fall back to the container bitrate
    bitrate = parse_int(video.get("bit_rate"), "bit_rate", file_path)
    if not bitrate:
        bitrate = parse_int(fmt.get("bit_rate"), "bit_rate", file_path) or 0

    return SourceProbe(
        duration_ms=duration_ms,
        width=width,
        height=height,
        bitrate_bps=bitrate,
        rotation_degrees=parse_rotation(video),
        color_space=video.get("pix_fmt") or DEFAULT_COLOR_SPACE,
    )
