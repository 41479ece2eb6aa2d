"""Integration tests for the vtj plan command."""

import json
from pathlib import Path
from unittest.mock import MagicMock

from click.testing import CliRunner

from vtj.cli import main
from vtj.cli.exit_codes import ExitCode
from vtj.config.models import StorageConfig, VTJConfig
from vtj.domain.models import SourceProbe
from vtj.introspector import MediaIntrospectionError


class TestPlanCommand:
    """Tests for the vtj plan CLI command."""

    def test_help_lists_commands(self) -> None:
        """Top-level help shows every command."""
        result = CliRunner().invoke(main, ["--help"], obj={"config": VTJConfig()})

        assert result.exit_code == 0
        for command in ("plan", "run", "status"):
            assert command in result.output

    def test_plan_help(self) -> None:
        """plan --help describes the command."""
        result = CliRunner().invoke(
            main, ["plan", "--help"], obj={"config": VTJConfig()}
        )

        assert result.exit_code == 0
        assert "Plan a transcode" in result.output
        assert "--format" in result.output

    def test_file_not_found(self, temp_dir: Path, cli_obj) -> None:
        """A missing file exits with TARGET_NOT_FOUND."""
        result = CliRunner().invoke(
            main, ["plan", str(temp_dir / "absent.mov")], obj=cli_obj()
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "File not found" in result.output

    def test_requires_bucket(self, source_file: Path, introspector) -> None:
        """Without a bucket there is no input or output location to plan."""
        obj = {"config": VTJConfig(), "introspector": introspector}
        result = CliRunner().invoke(main, ["plan", str(source_file)], obj=obj)

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "S3 bucket is not configured" in result.output

    def test_human_output(self, source_file: Path, cli_obj) -> None:
        """Human output shows geometry, destination and placements."""
        result = CliRunner().invoke(main, ["plan", str(source_file)], obj=cli_obj())

        assert result.exit_code == 0, result.output
        assert "Input: s3://media-bucket/input/clip.mov" in result.output
        assert "Output: 1920x1080 (scale 0.500)" in result.output
        assert "Destination: s3://media-bucket/output/" in result.output
        assert "Watermark: looping" in result.output

    def test_json_output(self, source_file: Path, cli_obj) -> None:
        """JSON output contains the plan and the CreateJob description."""
        result = CliRunner().invoke(
            main, ["plan", str(source_file), "--format", "json"], obj=cli_obj()
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["plan"]["output"]["width"] == 1920
        assert data["plan"]["output"]["height"] == 1080
        assert data["plan"]["overlay_mode"] == "looping"

        description = data["job_description"]
        assert description["Role"] == (
            "arn:aws:iam::123456789012:role/MediaConvertRole"
        )
        job_input = description["Settings"]["Inputs"][0]
        assert job_input["FileInput"] == "s3://media-bucket/input/clip.mov"
        output = description["Settings"]["OutputGroups"][0]["Outputs"][0]
        assert output["VideoDescription"]["Width"] == 1920
        assert output["NameModifier"] == data["plan"]["name_modifier"]

    def test_explicit_input_uri(self, source_file: Path, cli_obj) -> None:
        """--input-uri replaces the derived upload location."""
        result = CliRunner().invoke(
            main,
            [
                "plan",
                str(source_file),
                "--input-uri",
                "s3://other-bucket/raw/clip.mov",
            ],
            obj=cli_obj(),
        )

        assert result.exit_code == 0, result.output
        assert "Input: s3://other-bucket/raw/clip.mov" in result.output

    def test_static_overlay_for_yuv420p(self, source_file: Path, cli_obj) -> None:
        """4:2:0 sources get the two static placements."""
        introspector = MagicMock()
        introspector.get_source_probe.return_value = SourceProbe(
            duration_ms=12000, width=1280, height=720, color_space="yuv420p"
        )
        result = CliRunner().invoke(
            main,
            ["plan", str(source_file)],
            obj=cli_obj(introspector=introspector),
        )

        assert result.exit_code == 0, result.output
        assert "Watermark: static, 2 placements" in result.output
        assert "whole video" in result.output

    def test_unreadable_metadata_uses_defaults(
        self, source_file: Path, cli_obj
    ) -> None:
        """Probe failures fall back to the default metadata."""
        introspector = MagicMock()
        introspector.get_source_probe.side_effect = MediaIntrospectionError(
            "ffprobe failed"
        )
        result = CliRunner().invoke(
            main,
            ["plan", str(source_file)],
            obj=cli_obj(introspector=introspector),
        )

        assert result.exit_code == 0, result.output
        assert "defaults, metadata unavailable" in result.output

    def test_source_too_small(self, source_file: Path, cli_obj) -> None:
        """Degenerate sources exit with PLANNING_ERROR."""
        introspector = MagicMock()
        introspector.get_source_probe.return_value = SourceProbe(
            duration_ms=1000, width=1, height=1
        )
        result = CliRunner().invoke(
            main,
            ["plan", str(source_file)],
            obj=cli_obj(introspector=introspector),
        )

        assert result.exit_code == ExitCode.PLANNING_ERROR
        assert "too small" in result.output

    def test_custom_folders(self, source_file: Path, cli_obj, vtj_config) -> None:
        """Input and output folders come from the storage configuration."""
        vtj_config.storage = StorageConfig(
            bucket="media-bucket", input_folder="uploads", output_folder="renders"
        )
        result = CliRunner().invoke(main, ["plan", str(source_file)], obj=cli_obj())

        assert result.exit_code == 0, result.output
        assert "Input: s3://media-bucket/uploads/clip.mov" in result.output
        assert "Destination: s3://media-bucket/renders/" in result.output
