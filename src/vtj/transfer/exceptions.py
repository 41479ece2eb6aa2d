"""Exceptions raised by S3 transfers."""


class TransferError(Exception):
    """Raised when an upload or download fails."""

    pass


class InvalidS3UriError(TransferError):
    """Raised when a string is not a valid s3://bucket/key URI.

    Attributes:
        uri: The rejected URI.
    """

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Invalid S3 URI format: {uri}")
