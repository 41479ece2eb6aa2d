"""S3 transfers for source uploads and output downloads."""

from vtj.transfer.exceptions import InvalidS3UriError, TransferError
from vtj.transfer.s3 import (
    TransferProgress,
    content_type_for,
    create_s3_client,
    download_file,
    object_size,
    parse_s3_uri,
    upload_file,
)

__all__ = [
    "InvalidS3UriError",
    "TransferError",
    "TransferProgress",
    "content_type_for",
    "create_s3_client",
    "download_file",
    "object_size",
    "parse_s3_uri",
    "upload_file",
]
