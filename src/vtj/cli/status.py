"""CLI status command: follow an existing MediaConvert job."""

import logging

import click

from vtj.cli.context import (
    build_monitor,
    get_cli_config,
    get_job_service,
    require_valid_config,
    watch_job,
)
from vtj.cli.formatting import format_result_human

logger = logging.getLogger(__name__)


@click.command("status")
@click.argument("job_id")
@click.pass_context
def status_command(ctx: click.Context, job_id: str) -> None:
    """Monitor an existing job until it reaches a terminal state.

    JOB_ID is the MediaConvert job id printed by 'vtj run'.
    """
    config = get_cli_config(ctx)
    require_valid_config(config, require_remote=False)

    monitor = build_monitor(config, get_job_service(ctx))
    result = watch_job(monitor, job_id)
    click.echo(format_result_human(result))
