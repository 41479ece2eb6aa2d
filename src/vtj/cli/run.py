"""CLI run command: upload, transcode and optionally download a video."""

import logging
import sys
from pathlib import Path

import click

from vtj.cli.context import (
    build_monitor,
    get_cli_config,
    get_job_service,
    get_s3_client,
    probe_file,
    require_valid_config,
    watch_job,
)
from vtj.cli.exit_codes import ExitCode
from vtj.cli.formatting import format_result_human
from vtj.planning import PlanningError, assemble_plan, submit_plan
from vtj.remote import SubmissionError
from vtj.transfer import (
    TransferError,
    TransferProgress,
    download_file,
    object_size,
    parse_s3_uri,
    upload_file,
)

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("outputs")


@click.command("run")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--download/--no-download",
    default=True,
    help="Download the transcoded file when the job completes (default: on).",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Directory the transcoded file is downloaded to.",
)
@click.pass_context
def run_command(
    ctx: click.Context,
    file: Path,
    download: bool,
    output_dir: Path,
) -> None:
    """Transcode a local video with MediaConvert.

    FILE is uploaded to the configured input folder, a watermarked H.264
    transcode is submitted and monitored until it finishes.
    """
    config = get_cli_config(ctx)

    if not file.is_file():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    require_valid_config(config)

    probe = probe_file(ctx, file)
    s3_client = get_s3_client(ctx)

    try:
        input_uri = upload_file(
            s3_client,
            file,
            config.storage.bucket,
            config.storage.input_folder,
            progress=TransferProgress("Upload", file.stat().st_size),
        )
    except TransferError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TRANSFER_FAILED)

    try:
        plan = assemble_plan(input_uri, probe, config.planning, config.storage)
    except PlanningError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.PLANNING_ERROR)

    service = get_job_service(ctx)
    try:
        job_id = submit_plan(plan, service, config.mediaconvert)
    except SubmissionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.SUBMISSION_FAILED)

    click.echo(f"Job submitted: {job_id}")

    result = watch_job(build_monitor(config, service), job_id)
    click.echo(format_result_human(result))

    if not download:
        return

    if not result.output_uri_exact or not result.output_uri:
        click.echo(
            "Warning: Output file name could not be determined, skipping download",
            err=True,
        )
        return

    try:
        _, key = parse_s3_uri(result.output_uri)
        local_path = output_dir / Path(key).name
        progress = TransferProgress(
            "Download", object_size(s3_client, result.output_uri)
        )
        download_file(s3_client, result.output_uri, local_path, progress=progress)
    except TransferError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TRANSFER_FAILED)

    click.echo(f"Downloaded: {local_path}")
