"""Naming of listed keys relative to the addressed prefix.

Object stores know only flat keys. These helpers turn a raw key into the name
a filesystem view shows for it, given the prefix that was listed. Each raw
entry is normalized exactly once; feeding a normalized name back in is not
expected to give the same name.
"""

from datetime import datetime, timezone
from typing import NamedTuple, Optional

from bucketfs.client import Entry
from bucketfs.objectstorage.api import ObjectStat
from bucketfs.url import DELIMITER


class NormalizedName(NamedTuple):
    """Display name of a raw key and whether it stands for a directory."""

    name: str
    is_directory: bool


def normalize_prefix(prefix: str, delimiter: str = DELIMITER) -> str:
    """Return ``prefix`` with exactly one trailing delimiter."""
    return prefix.removesuffix(delimiter) + delimiter


def normalize_name(
    raw_key: str, prefix: str, delimiter: str = DELIMITER
) -> Optional[NormalizedName]:
    """Name a raw key from a one-level listing of ``prefix``.

    Keys ending with the delimiter are common prefixes (or explicit directory
    markers) and become directories without the trailing delimiter. Names are
    relative to the directory the prefix denotes when the key lies inside it,
    and the raw key otherwise:

        raw "2020/"           prefix ""        -> ("2020", dir)
        raw "docs/a.txt"      prefix "docs/"   -> ("a.txt", file)
        raw "docs/x/"         prefix "docs"    -> ("x", dir)
        raw "docs-old.txt"    prefix "docs"    -> ("docs-old.txt", file)
        raw "docs/"           prefix "docs"    -> ("docs", dir)
        raw "docs/"           prefix "docs/"   -> None

    Args:
        raw_key: Key or common prefix reported by the store
        prefix: Prefix that was listed
        delimiter: Key hierarchy separator

    Returns:
        The normalized name, or None when the raw key is the marker object of
        the listed directory itself
    """
    is_directory = raw_key.endswith(delimiter)
    normalized_prefix = normalize_prefix(prefix, delimiter)

    if prefix and raw_key == normalized_prefix:
        if prefix.endswith(delimiter):
            return None
        # Common prefix of the directory addressed without a trailing delimiter
        return NormalizedName(prefix, True)

    name = raw_key
    if prefix and raw_key.startswith(normalized_prefix):
        name = raw_key[len(normalized_prefix) :]

    if is_directory:
        name = name.removesuffix(delimiter)
    return NormalizedName(name, is_directory)


def recursive_name(
    raw_key: str, bucket: str, key: str, url_path: str, delimiter: str = DELIMITER
) -> str:
    """Name a key found by a recursive listing of ``bucket``/``key``.

    When a bucket is addressed without a trailing delimiter (``/photos``
    rather than ``/photos/``) names carry the bucket, so that listings of
    several buckets stay distinguishable. Keys already starting with the
    bucket name are left alone.

    Args:
        raw_key: Object key reported by the store
        bucket: Listed bucket
        key: Listed prefix within the bucket
        url_path: Path of the URL the listing was requested for
        delimiter: Key hierarchy separator

    Returns:
        Display name of the object
    """
    if not key:
        at_bucket_boundary = url_path == delimiter + bucket
        if at_bucket_boundary and not raw_key.startswith(bucket + delimiter):
            return delimiter.join((bucket, raw_key))
        return raw_key

    if key.endswith(delimiter):
        return raw_key.removeprefix(key)
    # The boundary of a prefix without delimiter is ambiguous; keep the raw key
    return raw_key


def file_entry(name: str, stat: ObjectStat) -> Entry:
    """Entry for a real object."""
    return Entry(
        name=name,
        size=stat.size,
        mod_time=stat.last_modified or datetime.now(timezone.utc),
        is_directory=False,
    )


def directory_entry(name: str, mod_time: Optional[datetime] = None) -> Entry:
    """Entry for a bucket or virtual directory.

    The store keeps no modification time for common prefixes, so virtual
    directories are stamped with the current time.
    """
    return Entry(
        name=name,
        size=0,
        mod_time=mod_time or datetime.now(timezone.utc),
        is_directory=True,
    )
