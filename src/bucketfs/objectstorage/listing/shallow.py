"""One-level listing of buckets, prefixes and objects."""

from typing import Generator

from bucketfs.client import Entry
from bucketfs.core import get_logger
from bucketfs.core.exceptions import StorageAPIError
from bucketfs.objectstorage.api import ObjectStorageAPI
from bucketfs.url import DELIMITER

from .entries import directory_entry, file_entry, normalize_name

logger = get_logger(__name__)


def list_shallow(
    api: ObjectStorageAPI, bucket: str, key: str, delimiter: str = DELIMITER
) -> Generator[Entry, None, None]:
    """List the entries directly below ``bucket``/``key``.

    Without a bucket, every bucket is listed as a directory. A key naming an
    existing object lists just that object, even if other keys continue it
    past a delimiter; the store has no way to tell an object from a directory
    of the same name, so the object wins. Anything else is a delimited listing
    of the key as a prefix, where common prefixes become directories.

    Errors from the store propagate and end the listing.

    Args:
        api: Object storage API
        bucket: Bucket to list, empty for the storage root
        key: Key or prefix within the bucket
        delimiter: Key hierarchy separator

    Yields:
        Entries in the order the store enumerates them
    """
    if not bucket and not key:
        for bucket_stat in api.list_buckets():
            yield directory_entry(bucket_stat.name, bucket_stat.creation_date)
        return

    if key:
        try:
            stat = api.stat_object(bucket, key)
        except StorageAPIError as e:
            logger.debug(
                "Exact object lookup missed, listing as prefix",
                bucket=bucket,
                key=key,
                code=e.code,
            )
        else:
            yield file_entry(stat.key, stat)
            return

    yield from list_prefix(api, bucket, key, delimiter)


def list_prefix(
    api: ObjectStorageAPI, bucket: str, prefix: str, delimiter: str = DELIMITER
) -> Generator[Entry, None, None]:
    """Delimited listing of ``prefix``, common prefixes becoming directories."""
    for raw in api.list_objects(bucket, prefix, recursive=False):
        normalized = normalize_name(raw.key, prefix, delimiter)
        if normalized is None:
            continue
        if normalized.is_directory:
            yield directory_entry(normalized.name)
        else:
            yield file_entry(normalized.name, raw)
