"""Object storage operations for S3-compatible services."""

from .api import (
    Boto3ObjectStorageAPI,
    BucketStat,
    ObjectStat,
    ObjectStorageAPI,
)
from .client import S3Client, new_s3_client
from .clients import S3ClientConfig, S3ClientManager, get_region
from .paths import resolve_bucket_and_key

__all__ = [
    "Boto3ObjectStorageAPI",
    "BucketStat",
    "ObjectStat",
    "ObjectStorageAPI",
    "S3Client",
    "S3ClientConfig",
    "S3ClientManager",
    "get_region",
    "new_s3_client",
    "resolve_bucket_and_key",
]
