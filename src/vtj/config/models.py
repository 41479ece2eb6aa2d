"""Configuration data models.

This module defines dataclasses for vtj configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AWSConfig:
    """AWS client settings.

    Credentials are not configured here; boto3 resolves them through its
    standard credential chain (environment, shared files, instance role).
    """

    region: str = "us-east-1"


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    If not specified, tools are looked up in PATH.
    """

    ffprobe: Path | None = None


@dataclass
class StorageConfig:
    """S3 locations used for inputs, outputs and the watermark image."""

    # Bucket holding inputs, outputs and assets (required for remote runs)
    bucket: str | None = None

    # Key prefix uploaded sources are placed under
    input_folder: str = "input"

    # Key prefix MediaConvert writes outputs under
    output_folder: str = "output"

    # Key of the watermark image inside the bucket
    watermark_key: str = "assets/watermark.png"

    @property
    def output_prefix(self) -> str:
        """S3 URI of the output folder, with a trailing slash."""
        return f"s3://{self.bucket}/{self.output_folder.strip('/')}/"

    def input_uri_for(self, file_name: str) -> str:
        """S3 URI a local file named file_name is uploaded to."""
        return f"s3://{self.bucket}/{self.input_folder.strip('/')}/{file_name}"

    @property
    def watermark_uri(self) -> str:
        return f"s3://{self.bucket}/{self.watermark_key.lstrip('/')}"


@dataclass
class MediaConvertConfig:
    """MediaConvert job submission and polling settings."""

    # Account endpoint (None = regional default endpoint)
    endpoint: str | None = None

    # IAM role MediaConvert assumes to read/write S3 (required)
    role_arn: str | None = None

    # Queue to submit to (None = default queue)
    queue_arn: str | None = None

    # How often to poll job status
    poll_interval_ms: int = 5000

    # Minimum seconds between periodic progress log lines
    progress_interval_seconds: int = 10

    # Consecutive failed polls tolerated before giving up
    max_poll_errors: int = 12

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.poll_interval_ms <= 0:
            raise ValueError(
                f"poll_interval_ms must be positive, got {self.poll_interval_ms}"
            )
        if self.progress_interval_seconds < 0:
            raise ValueError(
                "progress_interval_seconds must be non-negative, "
                f"got {self.progress_interval_seconds}"
            )
        if self.max_poll_errors < 1:
            raise ValueError(
                f"max_poll_errors must be at least 1, got {self.max_poll_errors}"
            )

    def endpoint_for(self, region: str) -> str:
        """Resolve the endpoint URL, defaulting to the regional endpoint."""
        return self.endpoint or f"https://mediaconvert.{region}.amazonaws.com"


@dataclass
class PlanningConfig:
    """Limits and defaults applied when planning a transcode."""

    # Maximum long edge of the output frame
    max_long_edge: int = 1920

    # Ceiling for the output bitrate
    max_bitrate_bps: int = 10_000_000

    # Bitrate assumed when the source bitrate is unknown
    default_bitrate_bps: int = 5_000_000

    # Watermark opacity (0 = transparent, 100 = opaque)
    overlay_opacity: int = 80

    # How long the watermark stays in each corner
    overlay_corner_ms: int = 5000

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_long_edge < 2:
            raise ValueError(
                f"max_long_edge must be at least 2, got {self.max_long_edge}"
            )
        if self.max_bitrate_bps <= 0:
            raise ValueError(
                f"max_bitrate_bps must be positive, got {self.max_bitrate_bps}"
            )
        if self.default_bitrate_bps <= 0:
            raise ValueError(
                "default_bitrate_bps must be positive, "
                f"got {self.default_bitrate_bps}"
            )
        if not 0 <= self.overlay_opacity <= 100:
            raise ValueError(
                f"overlay_opacity must be between 0 and 100, got {self.overlay_opacity}"
            )
        if self.overlay_corner_ms <= 0:
            raise ValueError(
                f"overlay_corner_ms must be positive, got {self.overlay_corner_ms}"
            )
        if self.overlay_corner_ms % 1000:
            raise ValueError(
                "overlay_corner_ms must be a whole number of seconds, "
                f"got {self.overlay_corner_ms}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class VTJConfig:
    """Main configuration container for vtj.

    Aggregates all configuration sections.
    """

    aws: AWSConfig = field(default_factory=AWSConfig)
    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    mediaconvert: MediaConvertConfig = field(default_factory=MediaConvertConfig)
    planning: PlanningConfig = field(default_factory=PlanningConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
