"""Fixtures for CLI integration tests.

Commands read their collaborators from the click context object, so the
tests inject a ready configuration, a stub introspector, a scripted job
service and a mock S3 client instead of talking to AWS or ffprobe.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

import vtj.cli as cli_module
from vtj.domain.models import SourceProbe


@pytest.fixture(autouse=True)
def skip_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring the root logger during tests."""
    monkeypatch.setattr(cli_module, "_configure_logging", lambda *args: None)


@pytest.fixture
def source_probe() -> SourceProbe:
    """4K landscape source with a pixel format that allows looping overlays."""
    return SourceProbe(
        duration_ms=30000,
        width=3840,
        height=2160,
        bitrate_bps=20_000_000,
        color_space="yuv444p",
    )


@pytest.fixture
def introspector(source_probe: SourceProbe) -> MagicMock:
    mock = MagicMock()
    mock.get_source_probe.return_value = source_probe
    return mock


@pytest.fixture
def s3_client() -> MagicMock:
    client = MagicMock()
    client.head_object.return_value = {"ContentLength": 1024}
    return client


@pytest.fixture
def source_file(temp_dir: Path) -> Path:
    path = temp_dir / "clip.mov"
    path.write_bytes(b"\x00" * 64)
    return path


@pytest.fixture
def cli_obj(vtj_config, introspector, s3_client):
    """Build the click context object for CliRunner.invoke(obj=...)."""

    def _build(job_service: Any = None, **overrides: Any) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "config": vtj_config,
            "introspector": introspector,
            "s3_client": s3_client,
        }
        if job_service is not None:
            obj["job_service"] = job_service
        obj.update(overrides)
        return obj

    return _build
