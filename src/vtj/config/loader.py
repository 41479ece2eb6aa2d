"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (VTJ_*, or the original S3_*/MEDIACONVERT_* names)
3. Config file (~/.vtj/config.toml)
4. Default values

Environment variables:
- VTJ_CONFIG_PATH: Path to config file (overrides default location)
- VTJ_DATA_DIR: Path to vtj data directory (overrides ~/.vtj/)
- AWS_REGION / VTJ_AWS_REGION: AWS region (default us-east-1)
- S3_BUCKET / VTJ_S3_BUCKET: Bucket for inputs, outputs and assets
- S3_INPUT_FOLDER, S3_OUTPUT_FOLDER: Key prefixes (default input/output)
- MEDIACONVERT_ENDPOINT: MediaConvert endpoint URL
- MEDIACONVERT_ROLE_ARN: IAM role MediaConvert assumes
- MEDIACONVERT_QUEUE_ARN: Queue to submit jobs to
- MEDIACONVERT_POLL_INTERVAL_MS: Status polling interval (default 5000)
- WATERMARK_OPACITY: Watermark opacity 0-100 (default 80)
- VTJ_LOG_LEVEL, VTJ_LOG_FILE, VTJ_LOG_FORMAT: Logging overrides
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vtj.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from vtj.config.env import EnvReader
from vtj.config.models import VTJConfig
from vtj.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".vtj"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_data_dir() -> Path:
    """Get the vtj data directory (~/.vtj/ unless VTJ_DATA_DIR is set)."""
    env_path = os.environ.get("VTJ_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_DIR


def get_default_config_path() -> Path:
    """Get the config file path.

    Can be overridden by VTJ_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("VTJ_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_data_dir() / "config.toml"


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()
    return load_toml_file(path, strict=strict)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    region: str | None = None,
    bucket: str | None = None,
    role_arn: str | None = None,
    poll_interval_ms: int | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> VTJConfig:
    """Get vtj configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides VTJ_CONFIG_PATH).
        region: CLI override for the AWS region.
        bucket: CLI override for the S3 bucket.
        role_arn: CLI override for the MediaConvert role ARN.
        poll_interval_ms: CLI override for the polling interval.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        VTJConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: When a merged value fails validation.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        aws_region=region,
        storage_bucket=bucket,
        mediaconvert_role_arn=role_arn,
        mediaconvert_poll_interval_ms=poll_interval_ms,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(cli_source, source_name="cli")
    return builder.build()


def validate_config(config: VTJConfig, *, require_remote: bool = True) -> list[str]:
    """Validate cross-field configuration constraints.

    Args:
        config: The configuration to validate.
        require_remote: Whether settings needed to talk to S3 and
            MediaConvert must be present.

    Returns:
        List of error strings. Empty list means configuration is valid.
    """
    errors: list[str] = []

    if require_remote:
        if not config.storage.bucket:
            errors.append("S3 bucket is not configured (set S3_BUCKET)")
        if not config.mediaconvert.role_arn:
            errors.append(
                "MediaConvert role is not configured (set MEDIACONVERT_ROLE_ARN)"
            )

    if config.storage.input_folder.strip("/") == config.storage.output_folder.strip(
        "/"
    ):
        errors.append("S3 input and output folders must differ")

    return errors
