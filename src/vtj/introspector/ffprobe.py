"""FFprobe-based implementation of MediaIntrospector protocol."""

import json
import shutil
import subprocess  # nosec B404 - only used for the TimeoutExpired type
from pathlib import Path

from vtj.core.subprocess_utils import run_command
from vtj.domain.models import SourceProbe
from vtj.introspector.interface import MediaIntrospectionError
from vtj.introspector.parsers import parse_ffprobe_output


class FFprobeIntrospector:
    """ffprobe-based implementation of MediaIntrospector protocol.

    Extracts duration, dimensions, bitrate, rotation and pixel format
    from video files using ffprobe.
    """

    def __init__(self, ffprobe_path: Path | None = None, timeout: int = 60) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. If not provided,
                ffprobe is looked up in PATH.
            timeout: Seconds to wait for ffprobe before giving up.

        Raises:
            MediaIntrospectionError: If ffprobe is not available.
        """
        self._ffprobe_path = ffprobe_path or self.find_ffprobe()
        self._timeout = timeout

        if self._ffprobe_path is None:
            raise MediaIntrospectionError(
                "ffprobe is not installed or not in PATH. "
                "Install ffmpeg or set VTJ_FFPROBE_PATH."
            )

    @staticmethod
    def find_ffprobe() -> Path | None:
        """Locate ffprobe on PATH."""
        found = shutil.which("ffprobe")
        return Path(found) if found else None

    @classmethod
    def is_available(cls, ffprobe_path: Path | None = None) -> bool:
        """Check if ffprobe is available on the system."""
        if ffprobe_path is not None:
            return ffprobe_path.exists()
        return cls.find_ffprobe() is not None

    def get_source_probe(self, path: Path) -> SourceProbe:
        """Extract metadata from a video file.

        Args:
            path: Path to the video file.

        Returns:
            SourceProbe with raw stream dimensions.

        Raises:
            MediaIntrospectionError: If the file cannot be introspected.
        """
        if not path.exists():
            raise MediaIntrospectionError(f"File not found: {path}")

        try:
            data = self._run_ffprobe(path)
        except subprocess.TimeoutExpired as e:
            raise MediaIntrospectionError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except json.JSONDecodeError as e:
            raise MediaIntrospectionError(
                f"Invalid ffprobe output for {path}: {e}"
            ) from e
        except OSError as e:
            raise MediaIntrospectionError(f"Could not run ffprobe: {e}") from e

        return parse_ffprobe_output(path, data)

    def _run_ffprobe(self, path: Path) -> dict:
        """Run ffprobe and return parsed JSON output.

        Raises:
            subprocess.TimeoutExpired: If ffprobe hangs.
            json.JSONDecodeError: If output is not valid JSON.
            MediaIntrospectionError: If ffprobe fails or output is incomplete.
        """
        stdout, stderr, returncode = run_command(
            [
                self._ffprobe_path,
                "-v",
                "error",
                "-print_format",
                "json",
                "-show_streams",
                "-show_format",
                path,
            ],
            timeout=self._timeout,
        )
        if returncode != 0:
            raise MediaIntrospectionError(
                f"ffprobe failed for {path}: {stderr.strip() or returncode}"
            )

        data = json.loads(stdout)
        if "streams" not in data:
            raise MediaIntrospectionError(
                f"Missing 'streams' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )
        if "format" not in data:
            raise MediaIntrospectionError(
                f"Missing 'format' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )
        return data
