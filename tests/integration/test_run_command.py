"""Integration tests for the vtj run command."""

from pathlib import Path
from unittest.mock import MagicMock

from botocore.exceptions import ClientError
from click.testing import CliRunner

from vtj.cli import main
from vtj.cli.exit_codes import ExitCode
from vtj.config.models import VTJConfig
from vtj.remote import SubmissionError

OUTPUT_URI = "s3://media-bucket/output/clip_1700000000000.mp4"


class TestRunCommand:
    """Tests for the vtj run CLI command."""

    def test_file_not_found(self, temp_dir: Path, cli_obj) -> None:
        """A missing file exits with TARGET_NOT_FOUND."""
        result = CliRunner().invoke(
            main, ["run", str(temp_dir / "absent.mov")], obj=cli_obj()
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "File not found" in result.output

    def test_incomplete_config(self, source_file: Path) -> None:
        """Missing bucket and role exit with CONFIG_ERROR."""
        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj={"config": VTJConfig()}
        )

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "S3 bucket is not configured" in result.output
        assert "MediaConvert role is not configured" in result.output

    def test_full_run_downloads_output(
        self,
        source_file: Path,
        temp_dir: Path,
        cli_obj,
        s3_client: MagicMock,
        job_factory,
        service_factory,
    ) -> None:
        """Upload, submit, monitor and download in one invocation."""
        service = service_factory(
            [
                job_factory("SUBMITTED"),
                job_factory("PROGRESSING", percent=40, phase="TRANSCODING"),
                job_factory("COMPLETE", percent=100),
            ]
        )
        output_dir = temp_dir / "outputs"

        result = CliRunner().invoke(
            main,
            ["run", str(source_file), "--output-dir", str(output_dir)],
            obj=cli_obj(service),
        )

        assert result.exit_code == 0, result.output
        assert "Job submitted: 1700000000000-abc123" in result.output
        assert "Job 1700000000000-abc123: COMPLETE" in result.output
        assert f"Output file: {OUTPUT_URI}" in result.output
        assert f"Downloaded: {output_dir / 'clip_1700000000000.mp4'}" in result.output

        upload_args = s3_client.upload_file.call_args.args
        assert upload_args[1:] == ("media-bucket", "input/clip.mov")

        assert len(service.submitted) == 1
        description = service.submitted[0]
        assert (
            description["Settings"]["Inputs"][0]["FileInput"]
            == "s3://media-bucket/input/clip.mov"
        )

        download_args = s3_client.download_file.call_args.args
        assert download_args[:2] == ("media-bucket", "output/clip_1700000000000.mp4")

    def test_no_download(
        self, source_file: Path, cli_obj, s3_client, job_factory, service_factory
    ) -> None:
        """--no-download stops after reporting the output URI."""
        service = service_factory([job_factory("COMPLETE")])

        result = CliRunner().invoke(
            main, ["run", str(source_file), "--no-download"], obj=cli_obj(service)
        )

        assert result.exit_code == 0, result.output
        assert f"Output file: {OUTPUT_URI}" in result.output
        s3_client.download_file.assert_not_called()

    def test_unknown_output_name_skips_download(
        self,
        source_file: Path,
        cli_obj,
        s3_client,
        job_factory,
        settings_factory,
        service_factory,
    ) -> None:
        """Without a name modifier only the output folder is known."""
        settings = settings_factory(name_modifier=None)
        service = service_factory([job_factory("COMPLETE", settings=settings)])

        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj=cli_obj(service)
        )

        assert result.exit_code == 0, result.output
        assert "Output location: s3://media-bucket/output/" in result.output
        assert "skipping download" in result.output
        s3_client.download_file.assert_not_called()

    def test_upload_failure(
        self, source_file: Path, cli_obj, s3_client, service_factory
    ) -> None:
        """S3 upload errors exit with TRANSFER_FAILED before submitting."""
        s3_client.upload_file.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "PutObject",
        )
        service = service_factory()

        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj=cli_obj(service)
        )

        assert result.exit_code == ExitCode.TRANSFER_FAILED
        assert "Upload of" in result.output
        assert service.submitted == []

    def test_submission_failure(self, source_file: Path, cli_obj) -> None:
        """A rejected CreateJob exits with SUBMISSION_FAILED."""
        service = MagicMock()
        service.create_job.side_effect = SubmissionError(
            "BadRequestException: invalid role"
        )

        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj=cli_obj(service)
        )

        assert result.exit_code == ExitCode.SUBMISSION_FAILED
        assert "CreateJob failed: BadRequestException: invalid role" in result.output
        service.get_job.assert_not_called()

    def test_job_failure(
        self, source_file: Path, cli_obj, job_factory, service_factory
    ) -> None:
        """A job ending in ERROR exits with JOB_FAILED and the service message."""
        service = service_factory(
            [
                job_factory(
                    "ERROR", ErrorCode=1010, ErrorMessage="Unable to open input file"
                )
            ]
        )

        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj=cli_obj(service)
        )

        assert result.exit_code == ExitCode.JOB_FAILED
        assert "Unable to open input file (code 1010)" in result.output

    def test_job_canceled(
        self, source_file: Path, cli_obj, job_factory, service_factory
    ) -> None:
        """A canceled job exits with JOB_CANCELED."""
        service = service_factory([job_factory("CANCELED")])

        result = CliRunner().invoke(
            main, ["run", str(source_file)], obj=cli_obj(service)
        )

        assert result.exit_code == ExitCode.JOB_CANCELED
        assert "was canceled" in result.output
