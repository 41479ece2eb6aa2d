"""Configuration builder with explicit layering.

ConfigBuilder builds a VTJConfig by composing configuration sources with
explicit precedence: later sources override earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from vtj.config.env import EnvReader
from vtj.config.models import (
    AWSConfig,
    LoggingConfig,
    MediaConvertConfig,
    PlanningConfig,
    StorageConfig,
    ToolPathsConfig,
    VTJConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and do not
    override values from lower-precedence sources.
    """

    # AWS
    aws_region: str | None = None

    # Tool paths
    ffprobe_path: Path | None = None

    # Storage
    storage_bucket: str | None = None
    storage_input_folder: str | None = None
    storage_output_folder: str | None = None
    storage_watermark_key: str | None = None

    # MediaConvert
    mediaconvert_endpoint: str | None = None
    mediaconvert_role_arn: str | None = None
    mediaconvert_queue_arn: str | None = None
    mediaconvert_poll_interval_ms: int | None = None
    mediaconvert_progress_interval_seconds: int | None = None
    mediaconvert_max_poll_errors: int | None = None

    # Planning
    planning_max_long_edge: int | None = None
    planning_max_bitrate_bps: int | None = None
    planning_default_bitrate_bps: int | None = None
    planning_overlay_opacity: int | None = None
    planning_overlay_corner_ms: int | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds VTJConfig by layering ConfigSources with precedence.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply a source; its non-None values override existing ones.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded as the origin of each value.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._origins[field_obj.name] = source_name

    def origin_of(self, key: str) -> str:
        """Return which source set a value ("default" if none did)."""
        return self._origins.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> VTJConfig:
        """Build the final VTJConfig with defaults for unset values.

        Raises:
            ValueError: If a value fails model validation.
        """
        region = self._get("aws_region", AWSConfig.region)

        storage_defaults = StorageConfig()
        storage = StorageConfig(
            bucket=self._get("storage_bucket", None),
            input_folder=self._get(
                "storage_input_folder", storage_defaults.input_folder
            ),
            output_folder=self._get(
                "storage_output_folder", storage_defaults.output_folder
            ),
            watermark_key=self._get(
                "storage_watermark_key", storage_defaults.watermark_key
            ),
        )

        mediaconvert = MediaConvertConfig(
            endpoint=self._get("mediaconvert_endpoint", None),
            role_arn=self._get("mediaconvert_role_arn", None),
            queue_arn=self._get("mediaconvert_queue_arn", None),
            poll_interval_ms=self._get("mediaconvert_poll_interval_ms", 5000),
            progress_interval_seconds=self._get(
                "mediaconvert_progress_interval_seconds", 10
            ),
            max_poll_errors=self._get("mediaconvert_max_poll_errors", 12),
        )

        planning = PlanningConfig(
            max_long_edge=self._get("planning_max_long_edge", 1920),
            max_bitrate_bps=self._get("planning_max_bitrate_bps", 10_000_000),
            default_bitrate_bps=self._get("planning_default_bitrate_bps", 5_000_000),
            overlay_opacity=self._get("planning_overlay_opacity", 80),
            overlay_corner_ms=self._get("planning_overlay_corner_ms", 5000),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        return VTJConfig(
            aws=AWSConfig(region=region),
            tools=ToolPathsConfig(ffprobe=self._get("ffprobe_path", None)),
            storage=storage,
            mediaconvert=mediaconvert,
            planning=planning,
            logging=logging_config,
        )


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    aws = file_config.get("aws", {})
    tools = file_config.get("tools", {})
    storage = file_config.get("storage", {})
    mediaconvert = file_config.get("mediaconvert", {})
    planning = file_config.get("planning", {})
    logging_conf = file_config.get("logging", {})

    ffprobe_str = tools.get("ffprobe")
    log_file_str = logging_conf.get("file")

    return ConfigSource(
        aws_region=aws.get("region"),
        ffprobe_path=Path(ffprobe_str).expanduser() if ffprobe_str else None,
        # Storage
        storage_bucket=storage.get("bucket"),
        storage_input_folder=storage.get("input_folder"),
        storage_output_folder=storage.get("output_folder"),
        storage_watermark_key=storage.get("watermark_key"),
        # MediaConvert
        mediaconvert_endpoint=mediaconvert.get("endpoint"),
        mediaconvert_role_arn=mediaconvert.get("role_arn"),
        mediaconvert_queue_arn=mediaconvert.get("queue_arn"),
        mediaconvert_poll_interval_ms=mediaconvert.get("poll_interval_ms"),
        mediaconvert_progress_interval_seconds=mediaconvert.get(
            "progress_interval_seconds"
        ),
        mediaconvert_max_poll_errors=mediaconvert.get("max_poll_errors"),
        # Planning
        planning_max_long_edge=planning.get("max_long_edge"),
        planning_max_bitrate_bps=planning.get("max_bitrate_bps"),
        planning_default_bitrate_bps=planning.get("default_bitrate_bps"),
        planning_overlay_opacity=planning.get("overlay_opacity"),
        planning_overlay_corner_ms=planning.get("overlay_corner_ms"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=Path(log_file_str).expanduser() if log_file_str else None,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        aws_region=reader.get_str("VTJ_AWS_REGION", "AWS_REGION"),
        ffprobe_path=reader.get_path("VTJ_FFPROBE_PATH", must_exist=True),
        # Storage
        storage_bucket=reader.get_str("VTJ_S3_BUCKET", "S3_BUCKET"),
        storage_input_folder=reader.get_str("VTJ_S3_INPUT_FOLDER", "S3_INPUT_FOLDER"),
        storage_output_folder=reader.get_str(
            "VTJ_S3_OUTPUT_FOLDER", "S3_OUTPUT_FOLDER"
        ),
        storage_watermark_key=reader.get_str("VTJ_WATERMARK_KEY", "WATERMARK_KEY"),
        # MediaConvert
        mediaconvert_endpoint=reader.get_str(
            "VTJ_MEDIACONVERT_ENDPOINT", "MEDIACONVERT_ENDPOINT"
        ),
        mediaconvert_role_arn=reader.get_str(
            "VTJ_MEDIACONVERT_ROLE_ARN", "MEDIACONVERT_ROLE_ARN"
        ),
        mediaconvert_queue_arn=reader.get_str(
            "VTJ_MEDIACONVERT_QUEUE_ARN", "MEDIACONVERT_QUEUE_ARN"
        ),
        mediaconvert_poll_interval_ms=reader.get_int(
            "VTJ_POLL_INTERVAL_MS", "MEDIACONVERT_POLL_INTERVAL_MS"
        ),
        mediaconvert_progress_interval_seconds=reader.get_int(
            "VTJ_PROGRESS_INTERVAL_SECONDS"
        ),
        mediaconvert_max_poll_errors=reader.get_int(
            "VTJ_MAX_POLL_ERRORS", "MEDIACONVERT_MAX_POLL_ERRORS"
        ),
        # Planning
        planning_max_long_edge=reader.get_int("VTJ_MAX_LONG_EDGE"),
        planning_max_bitrate_bps=reader.get_int("VTJ_MAX_BITRATE_BPS"),
        planning_default_bitrate_bps=reader.get_int("VTJ_DEFAULT_BITRATE_BPS"),
        planning_overlay_opacity=reader.get_int(
            "VTJ_WATERMARK_OPACITY", "WATERMARK_OPACITY"
        ),
        planning_overlay_corner_ms=reader.get_int("VTJ_WATERMARK_CORNER_MS"),
        # Logging
        logging_level=reader.get_str("VTJ_LOG_LEVEL"),
        logging_file=reader.get_path("VTJ_LOG_FILE"),
        logging_format=reader.get_str("VTJ_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("VTJ_LOG_INCLUDE_STDERR"),
    )
