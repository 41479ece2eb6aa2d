"""Remote transcoding service adapters.

- RemoteJobService: Protocol for job submission and polling
- MediaConvertService: AWS Elemental MediaConvert implementation
- RemoteJob: Parsed job state
"""

from vtj.remote.exceptions import RemoteServiceError, SubmissionError
from vtj.remote.interface import RemoteJobService
from vtj.remote.mediaconvert import (
    MediaConvertService,
    boto_config,
    create_mediaconvert_client,
)
from vtj.remote.models import RemoteJob

__all__ = [
    "RemoteJobService",
    "MediaConvertService",
    "RemoteJob",
    "RemoteServiceError",
    "SubmissionError",
    "boto_config",
    "create_mediaconvert_client",
]
