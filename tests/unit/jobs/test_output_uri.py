"""Tests for output URI reconstruction."""

import pytest

from vtj.jobs.output import (
    OutputUriError,
    reconstruct_output_uri,
    resolve_output_location,
)


class TestReconstructOutputUri:
    """Tests for reconstruct_output_uri()."""

    def test_mp4_output(self, settings_factory) -> None:
        """Destination, input stem, modifier and extension are joined."""
        settings = settings_factory()

        assert (
            reconstruct_output_uri(settings)
            == "s3://media-bucket/output/clip_1700000000000.mp4"
        )

    def test_mov_container(self, settings_factory) -> None:
        """MOV containers produce a .mov file."""
        settings = settings_factory(container="MOV")

        assert reconstruct_output_uri(settings).endswith("clip_1700000000000.mov")

    @pytest.mark.parametrize("container", [None, "M2TS"])
    def test_other_containers_default_to_mp4(
        self, settings_factory, container: str | None
    ) -> None:
        """Unknown or missing containers fall back to .mp4."""
        settings = settings_factory(container=container)

        assert reconstruct_output_uri(settings).endswith(".mp4")

    def test_destination_without_trailing_slash(self, settings_factory) -> None:
        """A single slash separates destination and file name."""
        settings = settings_factory(destination="s3://media-bucket/output")

        assert (
            reconstruct_output_uri(settings)
            == "s3://media-bucket/output/clip_1700000000000.mp4"
        )

    def test_only_last_extension_stripped(self, settings_factory) -> None:
        """Dotted input names keep everything before the last extension."""
        settings = settings_factory(file_input="s3://b/input/my.holiday.clip.mkv")

        assert reconstruct_output_uri(settings) == (
            "s3://media-bucket/output/my.holiday.clip_1700000000000.mp4"
        )

    def test_missing_name_modifier(self, settings_factory) -> None:
        """No modifier means the file name cannot be known."""
        settings = settings_factory(name_modifier=None)

        with pytest.raises(OutputUriError, match="NameModifier"):
            reconstruct_output_uri(settings)

    def test_missing_destination(self, settings_factory) -> None:
        """A file group without destination is rejected."""
        settings = settings_factory(destination="")

        with pytest.raises(OutputUriError, match="destination"):
            reconstruct_output_uri(settings)

    def test_missing_inputs(self, settings_factory) -> None:
        """Settings without inputs are rejected."""
        settings = settings_factory()
        settings["Inputs"] = []

        with pytest.raises(OutputUriError, match="inputs"):
            reconstruct_output_uri(settings)

    def test_empty_settings(self) -> None:
        """Empty settings are rejected."""
        with pytest.raises(OutputUriError):
            reconstruct_output_uri({})


class TestResolveOutputLocation:
    """Tests for resolve_output_location()."""

    def test_exact_uri(self, job_factory) -> None:
        """A complete job yields the exact file URI."""
        job = job_factory("COMPLETE")

        uri, exact = resolve_output_location(job, "s3://fallback/output/")

        assert uri == "s3://media-bucket/output/clip_1700000000000.mp4"
        assert exact is True

    def test_degrades_to_echoed_destination(
        self, job_factory, settings_factory
    ) -> None:
        """Without a modifier the echoed destination prefix is returned."""
        job = job_factory("COMPLETE", settings=settings_factory(name_modifier=None))

        uri, exact = resolve_output_location(job, "s3://fallback/output/")

        assert uri == "s3://media-bucket/output/"
        assert exact is False

    def test_degrades_to_fallback(self, job_factory) -> None:
        """Without echoed settings the configured prefix is returned."""
        job = job_factory("COMPLETE", settings={})

        uri, exact = resolve_output_location(job, "s3://fallback/output/")

        assert uri == "s3://fallback/output/"
        assert exact is False

    def test_malformed_settings_never_raise(self, job_factory) -> None:
        """Unexpected shapes degrade instead of raising."""
        job = job_factory(
            "COMPLETE",
            settings={"OutputGroups": [{"OutputGroupSettings": None}], "Inputs": 3},
        )

        uri, exact = resolve_output_location(job)

        assert uri is None
        assert exact is False
