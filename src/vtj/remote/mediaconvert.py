"""AWS Elemental MediaConvert implementation of RemoteJobService."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from vtj.remote.exceptions import RemoteServiceError, SubmissionError
from vtj.remote.models import RemoteJob

if TYPE_CHECKING:
    from vtj.config.models import AWSConfig, MediaConvertConfig

logger = logging.getLogger(__name__)


def boto_config() -> BotoConfig:
    """Client configuration shared by the S3 and MediaConvert clients."""
    return BotoConfig(
        retries={"max_attempts": 5, "mode": "standard"},
        connect_timeout=10,
        read_timeout=60,
    )


def create_mediaconvert_client(
    aws: AWSConfig,
    mediaconvert: MediaConvertConfig,
    session: boto3.session.Session | None = None,
) -> Any:
    """Create a MediaConvert client for the configured region and endpoint.

    Args:
        aws: AWS settings (region).
        mediaconvert: MediaConvert settings (endpoint).
        session: Optional boto3 session; a new one is created if None.

    Returns:
        A boto3 "mediaconvert" client owned by the caller.
    """
    session = session or boto3.session.Session(region_name=aws.region)
    endpoint = mediaconvert.endpoint_for(aws.region)
    logger.debug("Creating MediaConvert client for %s", endpoint)
    return session.client(
        "mediaconvert",
        region_name=aws.region,
        endpoint_url=endpoint,
        config=boto_config(),
    )


def _describe_client_error(error: ClientError | BotoCoreError) -> str:
    if isinstance(error, ClientError):
        details = error.response.get("Error", {})
        code = details.get("Code", "Unknown")
        message = details.get("Message", str(error))
        return f"{code}: {message}"
    return str(error)


class MediaConvertService:
    """RemoteJobService backed by a boto3 MediaConvert client."""

    def __init__(self, client: Any) -> None:
        """Initialize the service.

        Args:
            client: boto3 "mediaconvert" client (see create_mediaconvert_client).
        """
        self._client = client

    def create_job(self, description: dict[str, Any]) -> str:
        """Submit a job with CreateJob.

        Raises:
            SubmissionError: If MediaConvert rejects the job.
        """
        try:
            response = self._client.create_job(**description)
        except (ClientError, BotoCoreError) as e:
            raise SubmissionError(_describe_client_error(e)) from e

        try:
            job_id = response["Job"]["Id"]
        except (KeyError, TypeError) as e:
            raise SubmissionError("response did not include a job id") from e

        logger.info("MediaConvert job created: %s", job_id)
        return job_id

    def get_job(self, job_id: str) -> RemoteJob:
        """Fetch job state with GetJob.

        Raises:
            RemoteServiceError: If the call fails or the response is malformed.
        """
        try:
            response = self._client.get_job(Id=job_id)
        except (ClientError, BotoCoreError) as e:
            raise RemoteServiceError("GetJob", _describe_client_error(e)) from e

        try:
            return RemoteJob.from_response(response)
        except (KeyError, ValidationError) as e:
            raise RemoteServiceError("GetJob", f"malformed response: {e}") from e
