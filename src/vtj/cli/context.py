"""Shared helpers for resolving CLI dependencies.

Commands read collaborators from the click context object so tests can
inject fakes (``CliRunner.invoke(main, args, obj={...})``). When nothing
was injected, the production implementation is built from configuration.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, NoReturn

import click

from vtj.cli.exit_codes import ExitCode
from vtj.config import VTJConfig, validate_config
from vtj.domain.models import SourceProbe
from vtj.introspector import (
    FFprobeIntrospector,
    MediaIntrospectionError,
    MediaIntrospector,
)
from vtj.jobs import (
    JobCanceledError,
    JobFailedError,
    JobMonitor,
    MonitorCancelledError,
    MonitorResult,
    PollRetryExhaustedError,
)
from vtj.planning import probe_source
from vtj.remote import (
    MediaConvertService,
    RemoteJobService,
    create_mediaconvert_client,
)
from vtj.transfer import create_s3_client

logger = logging.getLogger(__name__)


def get_cli_config(ctx: click.Context) -> VTJConfig:
    """Return the configuration loaded by the main group."""
    return ctx.obj["config"]


def require_valid_config(config: VTJConfig, *, require_remote: bool = True) -> None:
    """Exit with CONFIG_ERROR if the configuration is incomplete."""
    errors = validate_config(config, require_remote=require_remote)
    if errors:
        for error in errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


def probe_file(ctx: click.Context, path: Path) -> SourceProbe:
    """Probe a local source, using default metadata if ffprobe is unusable."""
    introspector: MediaIntrospector | None = ctx.obj.get("introspector")
    if introspector is None:
        config = get_cli_config(ctx)
        try:
            introspector = FFprobeIntrospector(ffprobe_path=config.tools.ffprobe)
        except MediaIntrospectionError as e:
            logger.warning("%s Using default metadata.", e)
            return SourceProbe.defaults()
        ctx.obj["introspector"] = introspector
    return probe_source(path, introspector)


def get_job_service(ctx: click.Context) -> RemoteJobService:
    service = ctx.obj.get("job_service")
    if service is None:
        config = get_cli_config(ctx)
        client = create_mediaconvert_client(config.aws, config.mediaconvert)
        service = MediaConvertService(client)
        ctx.obj["job_service"] = service
    return service


def get_s3_client(ctx: click.Context) -> Any:
    client = ctx.obj.get("s3_client")
    if client is None:
        client = create_s3_client(get_cli_config(ctx).aws)
        ctx.obj["s3_client"] = client
    return client


def build_monitor(config: VTJConfig, service: RemoteJobService) -> JobMonitor:
    """Create a JobMonitor from the MediaConvert settings."""
    settings = config.mediaconvert
    return JobMonitor(
        service,
        poll_interval=settings.poll_interval_ms / 1000,
        progress_interval=settings.progress_interval_seconds,
        max_poll_errors=settings.max_poll_errors,
        fallback_location=(
            config.storage.output_prefix if config.storage.bucket else None
        ),
    )


@contextmanager
def _sigint_cancels(monitor: JobMonitor) -> Generator[None, None, None]:
    """Turn SIGINT into monitor.cancel() while the block runs.

    Restores the original handler on exit. Outside the main thread signal
    handlers cannot be installed and Ctrl+C stays a KeyboardInterrupt.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: object) -> None:
        logger.warning("Received SIGINT, stopping monitoring...")
        monitor.cancel()

    original_handler = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, original_handler)


def _exit_interrupted(job_id: str) -> NoReturn:
    click.echo(
        f"\nInterrupted. Job {job_id} keeps running; "
        f"resume with 'vtj status {job_id}'.",
        err=True,
    )
    sys.exit(ExitCode.INTERRUPTED)


def watch_job(monitor: JobMonitor, job_id: str) -> MonitorResult:
    """Run a monitor, exiting with the matching code on failure.

    Ctrl+C cancels monitoring only; the remote job keeps running.
    """
    try:
        with _sigint_cancels(monitor):
            return monitor.run(job_id)
    except JobFailedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.JOB_FAILED)
    except JobCanceledError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.JOB_CANCELED)
    except PollRetryExhaustedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.MONITOR_ABORTED)
    except (MonitorCancelledError, KeyboardInterrupt):
        _exit_interrupted(job_id)
