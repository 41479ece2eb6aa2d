"""CLI plan command: show the transcode plan for a local file."""

import logging
import sys
from pathlib import Path

import click

from vtj.cli.context import get_cli_config, probe_file
from vtj.cli.exit_codes import ExitCode
from vtj.cli.formatting import format_plan_human, format_plan_json
from vtj.planning import PlanningError, assemble_plan, build_job_description

logger = logging.getLogger(__name__)


@click.command("plan")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--input-uri",
    default=None,
    help="S3 URI of the source (default: the URI it would be uploaded to).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def plan_command(
    ctx: click.Context,
    file: Path,
    input_uri: str | None,
    output_format: str,
) -> None:
    """Plan a transcode without contacting AWS.

    FILE is the local video to probe. Prints the output geometry, bitrate
    and watermark placements, and with --format json the MediaConvert job
    description that would be submitted.
    """
    config = get_cli_config(ctx)

    if not file.exists():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    if not config.storage.bucket:
        click.echo("Error: S3 bucket is not configured (set S3_BUCKET)", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    probe = probe_file(ctx, file)
    uri = input_uri or config.storage.input_uri_for(file.name)

    try:
        plan = assemble_plan(uri, probe, config.planning, config.storage)
    except PlanningError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.PLANNING_ERROR)

    if output_format == "json":
        description = build_job_description(plan, config.mediaconvert)
        click.echo(format_plan_json(plan, description))
    else:
        click.echo(format_plan_human(plan))
