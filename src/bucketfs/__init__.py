"""A filesystem view of S3-compatible object storage.

Object stores only know buckets and flat keys. This package presents them as
directories and files: buckets are directories of the storage root, and keys
are grouped on the "/" delimiter into virtual directories. Listings are
streamed from a producer thread as they are enumerated, so arbitrarily large
buckets can be walked without holding them in memory.

Key Features:
    - Stat of the storage root, buckets, objects and virtual directories
    - Shallow (one level) and recursive listings
    - Ranged object reads, object writes
    - Bucket creation and canned ACLs
    - CLI interface

Recommended Usage:

    >>> from bucketfs import new_client, S3ClientConfig
    >>> client = new_client("s3://photos/2020/", S3ClientConfig(aws_profile="me"))
    >>> with client.list() as entries:
    ...     for entry in entries:
    ...         print(entry.name, entry.is_directory)

Advanced Usage:
    Import specific modules for advanced operations:

    >>> from bucketfs.objectstorage import S3Client, Boto3ObjectStorageAPI
    >>> from bucketfs.objectstorage.listing import normalize_name
"""

__version__ = "0.1.0"

from .client import Client, Entry
from .objectstorage import (
    ObjectStorageAPI,
    S3Client,
    S3ClientConfig,
    new_s3_client,
    resolve_bucket_and_key,
)
from .streaming import ListingStream

# Unified interface (recommended)
from .unified import list_storage_contents, new_client, stat_storage
from .url import DELIMITER, StorageURL

__all__ = [
    # Generic client
    "Client",
    "DELIMITER",
    "Entry",
    "ListingStream",
    "StorageURL",
    # Unified interface
    "list_storage_contents",
    "new_client",
    "stat_storage",
    # Object storage
    "ObjectStorageAPI",
    "S3Client",
    "S3ClientConfig",
    "new_s3_client",
    "resolve_bucket_and_key",
]
