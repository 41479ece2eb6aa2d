"""MediaIntrospector interface for source video probing."""

from pathlib import Path
from typing import Protocol

from vtj.domain.models import SourceProbe


class MediaIntrospectionError(Exception):
    """Raised when media introspection fails."""

    pass


class MediaIntrospector(Protocol):
    """Protocol for media introspection implementations.

    Implementations extract the properties the transcode planner needs
    (duration, dimensions, bitrate, rotation, pixel format) from a local
    video file.
    """

    def get_source_probe(self, path: Path) -> SourceProbe:
        """Extract metadata from a video file.

        Args:
            path: Path to the video file.

        Returns:
            SourceProbe with the raw (un-rotated) stream dimensions.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        ...
