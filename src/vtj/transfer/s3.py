"""S3 upload and download helpers.

Clients are created by the caller (see create_s3_client) and passed in,
so tests can substitute a mock.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from vtj.remote.mediaconvert import boto_config
from vtj.transfer.exceptions import InvalidS3UriError, TransferError

if TYPE_CHECKING:
    from vtj.config.models import AWSConfig

logger = logging.getLogger(__name__)

_S3_URI_PATTERN = re.compile(r"^s3://([^/]+)/(.+)$")

CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
    ".flv": "video/x-flv",
}
DEFAULT_CONTENT_TYPE = "video/mp4"


def create_s3_client(
    aws: AWSConfig, session: boto3.session.Session | None = None
) -> Any:
    """Create an S3 client for the configured region."""
    session = session or boto3.session.Session(region_name=aws.region)
    return session.client("s3", region_name=aws.region, config=boto_config())


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split an s3://bucket/key URI.

    Raises:
        InvalidS3UriError: If the URI has no bucket or no key.
    """
    match = _S3_URI_PATTERN.match(uri)
    if not match:
        raise InvalidS3UriError(uri)
    return match.group(1), match.group(2)


def content_type_for(path: Path | str) -> str:
    """Guess a video content type from the file extension."""
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


class TransferProgress:
    """boto3 transfer callback that logs progress by whole percent.

    boto3 may invoke the callback from several worker threads, so the
    byte counter is guarded by a lock.
    """

    def __init__(self, label: str, total_bytes: int) -> None:
        self._label = label
        self._total = total_bytes
        self._seen = 0
        self._last_percent = -1
        self._lock = threading.Lock()

    @property
    def percent(self) -> int:
        if self._total <= 0:
            return 100
        return min(self._seen * 100 // self._total, 100)

    def __call__(self, bytes_amount: int) -> None:
        with self._lock:
            self._seen += bytes_amount
            percent = self.percent
            if percent == self._last_percent:
                return
            self._last_percent = percent
        logger.info("%s progress: %d%%", self._label, percent)


def upload_file(
    client: Any,
    path: Path,
    bucket: str,
    prefix: str,
    progress: TransferProgress | None = None,
) -> str:
    """Upload a local file to s3://bucket/prefix/<file name>.

    Args:
        client: boto3 S3 client.
        path: Local file to upload.
        bucket: Destination bucket.
        prefix: Key prefix (folder) inside the bucket.
        progress: Optional progress callback.

    Returns:
        S3 URI of the uploaded object.

    Raises:
        TransferError: If the file does not exist or the upload fails.
    """
    if not path.is_file():
        raise TransferError(f"File not found: {path}")

    key = f"{prefix.strip('/')}/{path.name}" if prefix.strip("/") else path.name
    uri = f"s3://{bucket}/{key}"
    logger.info("Uploading %s to %s", path.name, uri)

    try:
        client.upload_file(
            str(path),
            bucket,
            key,
            ExtraArgs={"ContentType": content_type_for(path)},
            Callback=progress,
        )
    except (ClientError, BotoCoreError, S3UploadFailedError) as e:
        raise TransferError(f"Upload of {path} failed: {e}") from e

    logger.info("Upload complete: %s", uri)
    return uri


def download_file(
    client: Any,
    uri: str,
    local_path: Path,
    progress: TransferProgress | None = None,
) -> Path:
    """Download an S3 object to a local path, creating parent directories.

    Raises:
        InvalidS3UriError: If uri is not an s3:// URI with a key.
        TransferError: If the download fails.
    """
    bucket, key = parse_s3_uri(uri)
    local_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s to %s", uri, local_path)

    try:
        client.download_file(bucket, key, str(local_path), Callback=progress)
    except (ClientError, BotoCoreError) as e:
        raise TransferError(f"Download of {uri} failed: {e}") from e

    logger.info("Download complete: %s", local_path)
    return local_path


def object_size(client: Any, uri: str) -> int:
    """Return the size in bytes of an S3 object (0 if unknown).

    Raises:
        InvalidS3UriError: If uri is not an s3:// URI with a key.
        TransferError: If the object cannot be inspected.
    """
    bucket, key = parse_s3_uri(uri)
    try:
        response = client.head_object(Bucket=bucket, Key=key)
    except (ClientError, BotoCoreError) as e:
        raise TransferError(f"Cannot inspect {uri}: {e}") from e
    return int(response.get("ContentLength", 0))
