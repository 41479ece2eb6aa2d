"""TOML config file loading."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a config file exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path}: {reason}")


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise TomlParseError when the file cannot be read
            or parsed. If False, log a warning and return an empty dict.

    Returns:
        Parsed dictionary. Empty dict if the file doesn't exist.
    """
    if not path.exists():
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise TomlParseError(path, str(e)) from e
        logger.warning("Failed to load TOML file %s: %s", path, e)
        return {}

    logger.debug("Loaded TOML config from %s", path)
    return config
