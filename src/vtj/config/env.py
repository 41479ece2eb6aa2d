"""Environment variable reader with dependency injection support.

Settings can be given under a vtj-specific name (VTJ_*) or under the
names used by the .env files of the original deployment (S3_BUCKET,
MEDIACONVERT_ROLE_ARN, ...). EnvReader looks names up in order and
returns the first one that is set.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Typed reader over an environment mapping.

    Example:
        reader = EnvReader(env={"S3_BUCKET": "media"})
        reader.get_str("VTJ_BUCKET", "S3_BUCKET")  # "media"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _lookup(self, names: tuple[str, ...]) -> tuple[str, str] | None:
        """Return (name, value) of the first set, non-empty variable."""
        for name in names:
            value = self._env.get(name)
            if value is not None and value.strip() != "":
                return name, value.strip()
        return None

    def get_str(self, *names: str) -> str | None:
        """Get a string from the first set variable among names."""
        found = self._lookup(names)
        return found[1] if found else None

    def get_int(self, *names: str) -> int | None:
        """Get an integer from the first set variable among names.

        Returns None (and logs a warning) when the value is not an integer.
        """
        found = self._lookup(names)
        if found is None:
            return None
        name, value = found
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", name, value)
            return None

    def get_bool(self, *names: str) -> bool | None:
        """Get a boolean; "true", "1", "yes" and "on" are true."""
        found = self._lookup(names)
        if found is None:
            return None
        return found[1].lower() in ("true", "1", "yes", "on")

    def get_path(self, *names: str, must_exist: bool = False) -> Path | None:
        """Get a path (tilde-expanded) from the first set variable.

        Args:
            names: Variable names to try in order.
            must_exist: If True, ignore (and warn about) paths that do
                not exist.
        """
        found = self._lookup(names)
        if found is None:
            return None
        name, value = found
        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                name,
                value,
            )
            return None
        return path
