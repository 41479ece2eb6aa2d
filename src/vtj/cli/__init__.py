"""CLI module for Video Transcode Job."""

import logging
import sys
from pathlib import Path

import click

from vtj.cli.exit_codes import ExitCode

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options.

    Args:
        ctx: Click context holding the loaded configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from vtj.config import build_logging_config
    from vtj.logging import configure_logging

    logging_config = build_logging_config(
        ctx.obj["config"].logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    configure_logging(logging_config)
    _logging_configured = True


def _load_config(ctx: click.Context, config_path: Path | None, **overrides):
    """Load configuration into the context unless a test injected one.

    Keyword overrides (region, bucket, role_arn, poll_interval_ms) come from
    the command line and win over the file and the environment.
    """
    if "config" in ctx.obj:
        return

    from vtj.config import TomlParseError, get_config

    try:
        ctx.obj["config"] = get_config(config_path, strict=True, **overrides)
    except (TomlParseError, ValueError) as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="vtj")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.vtj/config.toml or VTJ_CONFIG_PATH).",
)
@click.option(
    "--bucket",
    default=None,
    help="Override the S3 bucket (default: S3_BUCKET).",
)
@click.option(
    "--region",
    default=None,
    help="Override the AWS region (default: AWS_REGION).",
)
@click.option(
    "--role-arn",
    default=None,
    help="Override the MediaConvert role (default: MEDIACONVERT_ROLE_ARN).",
)
@click.option(
    "--poll-interval-ms",
    type=click.IntRange(min=1),
    default=None,
    help="Override the job polling interval in milliseconds.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    bucket: str | None,
    region: str | None,
    role_arn: str | None,
    poll_interval_ms: int | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Video Transcode Job - Plan, submit and monitor MediaConvert transcodes."""
    ctx.ensure_object(dict)
    _load_config(
        ctx,
        config_path,
        region=region,
        bucket=bucket,
        role_arn=role_arn,
        poll_interval_ms=poll_interval_ms,
    )
    _configure_logging(ctx, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from vtj.cli.plan import plan_command
    from vtj.cli.run import run_command
    from vtj.cli.status import status_command

    main.add_command(plan_command)
    main.add_command(run_command)
    main.add_command(status_command)


_register_commands()
