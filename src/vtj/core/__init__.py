"""Shared helpers used across vtj packages."""

from vtj.core.subprocess_utils import run_command

__all__ = ["run_command"]
