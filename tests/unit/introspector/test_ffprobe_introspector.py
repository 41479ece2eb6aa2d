"""Tests for FFprobeIntrospector."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from vtj.introspector.ffprobe import FFprobeIntrospector
from vtj.introspector.interface import MediaIntrospectionError

FFPROBE = Path("/usr/bin/ffprobe")


@pytest.fixture
def video_file(temp_dir: Path) -> Path:
    path = temp_dir / "clip.mp4"
    path.write_bytes(b"\x00" * 16)
    return path


class TestFFprobeIntrospectorInit:
    """Tests for ffprobe discovery."""

    def test_missing_ffprobe(self) -> None:
        """Construction fails when ffprobe is not on PATH."""
        with patch("vtj.introspector.ffprobe.shutil.which", return_value=None):
            with pytest.raises(MediaIntrospectionError, match="ffprobe"):
                FFprobeIntrospector()

    def test_explicit_path(self) -> None:
        """An explicit path skips PATH lookup."""
        with patch("vtj.introspector.ffprobe.shutil.which") as which:
            FFprobeIntrospector(ffprobe_path=FFPROBE)

        which.assert_not_called()

    def test_is_available(self) -> None:
        """is_available() reflects the PATH lookup."""
        with patch("vtj.introspector.ffprobe.shutil.which", return_value=None):
            assert FFprobeIntrospector.is_available() is False
        with patch(
            "vtj.introspector.ffprobe.shutil.which", return_value=str(FFPROBE)
        ):
            assert FFprobeIntrospector.is_available() is True


class TestGetSourceProbe:
    """Tests for FFprobeIntrospector.get_source_probe()."""

    def test_parses_output(self, video_file: Path, landscape_fixture: dict) -> None:
        """ffprobe JSON is parsed into a SourceProbe."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)
        with patch(
            "vtj.introspector.ffprobe.run_command",
            return_value=(json.dumps(landscape_fixture), "", 0),
        ) as run:
            probe = introspector.get_source_probe(video_file)

        assert (probe.width, probe.height) == (1920, 1080)
        args = run.call_args.args[0]
        assert args[0] == FFPROBE
        assert "-show_streams" in args
        assert "-show_format" in args
        assert args[-1] == video_file

    def test_file_not_found(self, temp_dir: Path) -> None:
        """Missing files fail before running ffprobe."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)

        with pytest.raises(MediaIntrospectionError, match="File not found"):
            introspector.get_source_probe(temp_dir / "missing.mp4")

    def test_nonzero_exit(self, video_file: Path) -> None:
        """A failing ffprobe is reported with its stderr."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)
        with patch(
            "vtj.introspector.ffprobe.run_command",
            return_value=("", "Invalid data found when processing input\n", 1),
        ):
            with pytest.raises(MediaIntrospectionError, match="Invalid data"):
                introspector.get_source_probe(video_file)

    def test_timeout(self, video_file: Path) -> None:
        """Timeouts become introspection errors."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE, timeout=5)
        with patch(
            "vtj.introspector.ffprobe.run_command",
            side_effect=subprocess.TimeoutExpired(cmd="ffprobe", timeout=5),
        ):
            with pytest.raises(MediaIntrospectionError, match="timed out"):
                introspector.get_source_probe(video_file)

    def test_invalid_json(self, video_file: Path) -> None:
        """Unparseable output becomes an introspection error."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)
        with patch(
            "vtj.introspector.ffprobe.run_command", return_value=("{not json", "", 0)
        ):
            with pytest.raises(MediaIntrospectionError, match="Invalid ffprobe output"):
                introspector.get_source_probe(video_file)

    def test_missing_sections(self, video_file: Path) -> None:
        """Output without streams is rejected."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)
        with patch(
            "vtj.introspector.ffprobe.run_command",
            return_value=(json.dumps({"format": {}}), "", 0),
        ):
            with pytest.raises(MediaIntrospectionError, match="streams"):
                introspector.get_source_probe(video_file)

    def test_unrunnable_binary(self, video_file: Path) -> None:
        """A path that cannot be executed becomes an introspection error."""
        introspector = FFprobeIntrospector(ffprobe_path=FFPROBE)
        with patch(
            "vtj.introspector.ffprobe.run_command",
            side_effect=FileNotFoundError(2, "No such file", str(FFPROBE)),
        ):
            with pytest.raises(MediaIntrospectionError, match="Could not run ffprobe"):
                introspector.get_source_probe(video_file)
