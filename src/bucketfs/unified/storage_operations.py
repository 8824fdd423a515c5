"""Unified storage operations that pick a client from the URL scheme."""

from typing import Optional

from bucketfs.client import Client, Entry
from bucketfs.core import get_logger
from bucketfs.core.exceptions import ValidationError
from bucketfs.objectstorage import S3ClientConfig, new_s3_client
from bucketfs.streaming import ListingStream
from bucketfs.url import StorageURL

logger = get_logger(__name__)

OBJECT_STORAGE_SCHEMES = ("s3", "http", "https")


def new_client(url: str, config: Optional[S3ClientConfig] = None) -> Client:
    """
    Create the storage client for a URL.

    Args:
        url: Storage URL (s3://bucket/key or http(s)://host/bucket/key)
        config: Object storage configuration

    Returns:
        Client addressing the URL

    Raises:
        ValidationError: If the URL scheme is not supported
    """
    storage_url = StorageURL.parse(url)

    if storage_url.scheme in OBJECT_STORAGE_SCHEMES:
        return new_s3_client(storage_url, config)

    raise ValidationError(
        f"Unsupported URL scheme '{storage_url.scheme}'. "
        f"Must be one of: {', '.join(OBJECT_STORAGE_SCHEMES)}"
    )


def stat_storage(url: str, config: Optional[S3ClientConfig] = None) -> Entry:
    """
    Describe what is stored at a URL.

    Args:
        url: Storage URL
        config: Object storage configuration

    Returns:
        Entry for the storage root, bucket, directory or object
    """
    logger.info("Stat storage", url=url)
    return new_client(url, config).stat()


def list_storage_contents(
    url: str,
    config: Optional[S3ClientConfig] = None,
    recursive: bool = False,
) -> ListingStream:
    """
    List storage contents as a stream of entries.

    Args:
        url: Storage URL
        config: Object storage configuration
        recursive: List everything below the URL instead of one level

    Returns:
        Stream of entries
    """
    return new_client(url, config).list(recursive=recursive)
