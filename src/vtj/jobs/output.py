"""Output artifact URI reconstruction.

MediaConvert does not report the name of the file it wrote. The URI is
rebuilt from the job settings it echoes back: the file group destination,
the input file's stem, the output NameModifier and the container extension.
"""

import logging
from pathlib import PurePosixPath
from typing import Any

from vtj.remote.models import RemoteJob

logger = logging.getLogger(__name__)

CONTAINER_EXTENSIONS = {
    "MP4": ".mp4",
    "MOV": ".mov",
}
DEFAULT_EXTENSION = ".mp4"


class OutputUriError(Exception):
    """Raised when the echoed settings lack a field needed for the URI."""

    pass


def _first(items: Any, what: str) -> dict[str, Any]:
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        raise OutputUriError(f"No {what} in job settings")
    return items[0]


def _dig(mapping: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(mapping, dict):
            return None
        mapping = mapping.get(key)
    return mapping


def _destination(settings: dict[str, Any]) -> str:
    group = _first(settings.get("OutputGroups"), "output groups")
    destination = _dig(
        group, "OutputGroupSettings", "FileGroupSettings", "Destination"
    )
    if not destination or not isinstance(destination, str):
        raise OutputUriError("File group has no destination")
    return destination


def reconstruct_output_uri(settings: dict[str, Any]) -> str:
    """Rebuild the output file URI from echoed job settings.

    Args:
        settings: The "Settings" object of a MediaConvert job.

    Returns:
        URI of the output file, e.g. s3://bucket/output/clip_1700000000000.mp4.

    Raises:
        OutputUriError: If the destination, input or NameModifier is missing.
    """
    destination = _destination(settings)
    file_input = _first(settings.get("Inputs"), "inputs").get("FileInput")
    if not file_input or not isinstance(file_input, str):
        raise OutputUriError("Input has no FileInput")

    group = _first(settings.get("OutputGroups"), "output groups")
    output = _first(group.get("Outputs"), "outputs")
    name_modifier = output.get("NameModifier")
    if not name_modifier or not isinstance(name_modifier, str):
        raise OutputUriError("Output has no NameModifier")

    container = _dig(output, "ContainerSettings", "Container")
    extension = DEFAULT_EXTENSION
    if isinstance(container, str):
        extension = CONTAINER_EXTENSIONS.get(container.upper(), DEFAULT_EXTENSION)
    stem = PurePosixPath(file_input).stem

    return f"{destination.rstrip('/')}/{stem}{name_modifier}{extension}"


def resolve_output_location(
    job: RemoteJob, fallback: str | None = None
) -> tuple[str | None, bool]:
    """Find where a completed job wrote its output.

    Never raises. If the exact file URI cannot be rebuilt, the echoed
    destination prefix is returned, else the fallback prefix.

    Args:
        job: Completed job snapshot.
        fallback: Configured output prefix.

    Returns:
        Tuple of (uri, exact). exact is False when uri is only a prefix.
    """
    try:
        return reconstruct_output_uri(job.settings), True
    except OutputUriError as e:
        logger.warning("Could not determine output file for job %s: %s", job.id, e)

    try:
        return _destination(job.settings), False
    except OutputUriError:
        return fallback, False
