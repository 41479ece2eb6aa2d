"""Introspector module for Video Transcode Job.

- MediaIntrospector: Protocol defining the introspection interface
- FFprobeIntrospector: Production implementation using ffprobe
- MediaIntrospectionError: Exception for introspection failures
"""

from vtj.introspector.ffprobe import FFprobeIntrospector
from vtj.introspector.interface import (
    MediaIntrospectionError,
    MediaIntrospector,
)
from vtj.introspector.parsers import parse_ffprobe_output

__all__ = [
    "MediaIntrospector",
    "MediaIntrospectionError",
    "FFprobeIntrospector",
    "parse_ffprobe_output",
]
