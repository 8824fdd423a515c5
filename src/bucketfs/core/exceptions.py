"""Exception hierarchy for bucketfs."""

from typing import Optional


class BucketFSError(Exception):
    """Base exception for all bucketfs errors."""

    pass


class ValidationError(BucketFSError):
    """Raised when validation fails."""

    pass


class InvalidQueryURL(ValidationError):
    """Raised when a URL addresses an object where only a bucket is valid."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL for bucket operation: {url}")


class StorageAPIError(BucketFSError):
    """Raised when the object storage API reports a failure.

    The originating botocore exception, if any, is available as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.bucket = bucket
        self.key = key


class ObjectNotFoundError(StorageAPIError):
    """Raised when an exact object key does not exist."""

    pass


class BucketNotFoundError(StorageAPIError):
    """Raised when a bucket does not exist."""

    pass
