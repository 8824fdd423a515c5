"""Recursive listing flattened into files."""

from typing import Generator

from bucketfs.client import Entry
from bucketfs.objectstorage.api import ObjectStorageAPI
from bucketfs.url import DELIMITER

from .entries import file_entry, recursive_name


def list_recursive(
    api: ObjectStorageAPI,
    bucket: str,
    key: str,
    url_path: str,
    delimiter: str = DELIMITER,
) -> Generator[Entry, None, None]:
    """List every object below ``bucket``/``key``.

    Without a bucket, the objects of every bucket are listed one bucket after
    the other and named ``bucket/key``. No directory entries are produced.
    Errors from the store propagate and end the listing.

    Args:
        api: Object storage API
        bucket: Bucket to list, empty for the storage root
        key: Prefix within the bucket
        url_path: Path of the URL being listed, used for naming
        delimiter: Key hierarchy separator

    Yields:
        File entries in the order the store enumerates them
    """
    if not bucket and not key:
        for bucket_stat in api.list_buckets():
            for raw in api.list_objects(bucket_stat.name, "", recursive=True):
                yield file_entry(delimiter.join((bucket_stat.name, raw.key)), raw)
        return

    for raw in api.list_objects(bucket, key, recursive=True):
        yield file_entry(recursive_name(raw.key, bucket, key, url_path, delimiter), raw)
