"""Shared test fixtures for Video Transcode Job."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any

import pytest

from vtj.config.models import (
    MediaConvertConfig,
    PlanningConfig,
    StorageConfig,
    VTJConfig,
)
from vtj.remote.exceptions import RemoteServiceError
from vtj.remote.models import RemoteJob


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name.

    Args:
        name: Name of the fixture file (without .json extension).

    Returns:
        Parsed JSON data from the fixture.
    """
    fixture_path = Path(__file__).parent / "fixtures" / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def landscape_fixture() -> dict:
    """1920x1080 H.264 source, 30 s, yuv444p."""
    return load_ffprobe_fixture("landscape_1080p")


@pytest.fixture
def rotated_phone_fixture() -> dict:
    """3840x2160 HEVC phone recording rotated -90 degrees, yuv420p10le."""
    return load_ffprobe_fixture("rotated_4k_phone")


@pytest.fixture
def cover_art_fixture() -> dict:
    """Audio file whose only video stream is attached cover art."""
    return load_ffprobe_fixture("cover_art_only")


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig(bucket="media-bucket")


@pytest.fixture
def planning_config() -> PlanningConfig:
    return PlanningConfig()


@pytest.fixture
def mediaconvert_config() -> MediaConvertConfig:
    return MediaConvertConfig(
        role_arn="arn:aws:iam::123456789012:role/MediaConvertRole",
        poll_interval_ms=1,
    )


@pytest.fixture
def vtj_config(
    storage_config: StorageConfig,
    planning_config: PlanningConfig,
    mediaconvert_config: MediaConvertConfig,
) -> VTJConfig:
    """Complete configuration with a bucket and role set."""
    return VTJConfig(
        storage=storage_config,
        planning=planning_config,
        mediaconvert=mediaconvert_config,
    )


def make_settings(
    file_input: str = "s3://media-bucket/input/clip.mov",
    destination: str = "s3://media-bucket/output/",
    name_modifier: str | None = "_1700000000000",
    container: str | None = "MP4",
) -> dict[str, Any]:
    """Build the echoed Settings object of a MediaConvert job."""
    output: dict[str, Any] = {}
    if name_modifier is not None:
        output["NameModifier"] = name_modifier
    if container is not None:
        output["ContainerSettings"] = {"Container": container}
    return {
        "Inputs": [{"FileInput": file_input}],
        "OutputGroups": [
            {
                "OutputGroupSettings": {
                    "Type": "FILE_GROUP_SETTINGS",
                    "FileGroupSettings": {"Destination": destination},
                },
                "Outputs": [output],
            }
        ],
    }


def make_job(
    status: str,
    job_id: str = "1700000000000-abc123",
    percent: int | None = None,
    phase: str | None = None,
    settings: dict[str, Any] | None = None,
    **extra: Any,
) -> RemoteJob:
    """Build a RemoteJob the way MediaConvert reports it."""
    data: dict[str, Any] = {"Id": job_id, "Status": status}
    if percent is not None:
        data["JobPercentComplete"] = percent
    if phase is not None:
        data["CurrentPhase"] = phase
    data["Settings"] = settings if settings is not None else make_settings()
    data.update(extra)
    return RemoteJob.model_validate(data)


class FakeJobService:
    """Scripted RemoteJobService.

    get_job() returns (or raises) the scripted responses in order and keeps
    returning the last one once the script is exhausted.
    """

    def __init__(
        self, responses: list[RemoteJob | Exception] | None = None
    ) -> None:
        self.responses = list(responses or [])
        self.submitted: list[dict[str, Any]] = []
        self.polls = 0
        self.job_id = "1700000000000-abc123"

    def create_job(self, description: dict[str, Any]) -> str:
        self.submitted.append(description)
        return self.job_id

    def get_job(self, job_id: str) -> RemoteJob:
        if not self.responses:
            raise RemoteServiceError("GetJob", "no scripted response")
        index = min(self.polls, len(self.responses) - 1)
        self.polls += 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


class FakeClock:
    """Manual monotonic clock advanced by the fake sleep."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings_factory():
    """Factory for echoed MediaConvert job settings (see make_settings)."""
    return make_settings


@pytest.fixture
def job_factory():
    """Factory for RemoteJob snapshots (see make_job)."""
    return make_job


@pytest.fixture
def service_factory():
    """Factory for scripted job services (see FakeJobService)."""
    return FakeJobService
