"""Configuration management for Video Transcode Job.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables
3. Config file (~/.vtj/config.toml)
4. Default values (lowest priority)
"""

from vtj.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from vtj.config.env import EnvReader
from vtj.config.loader import (
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from vtj.config.logging_factory import build_logging_config
from vtj.config.models import (
    AWSConfig,
    LoggingConfig,
    MediaConvertConfig,
    PlanningConfig,
    StorageConfig,
    ToolPathsConfig,
    VTJConfig,
)
from vtj.config.toml_parser import TomlParseError, load_toml_file

__all__ = [
    # Models
    "AWSConfig",
    "LoggingConfig",
    "MediaConvertConfig",
    "PlanningConfig",
    "StorageConfig",
    "ToolPathsConfig",
    "VTJConfig",
    # Loader
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
    # Building blocks
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "load_toml_file",
    "TomlParseError",
]
