"""Object storage API consumed by the listing engine.

``ObjectStorageAPI`` is the bucket/key level capability bucketfs builds its
filesystem view on. ``Boto3ObjectStorageAPI`` implements it for any
S3-compatible service through a boto3 client.

Failures are raised as ``StorageAPIError`` subclasses with the botocore
exception chained as the cause. A missing object is always reported as
``ObjectNotFoundError`` so callers can tell it apart from every other failure.
"""

import heapq
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, BinaryIO, Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from bucketfs.core import get_logger
from bucketfs.core.exceptions import (
    BucketNotFoundError,
    ObjectNotFoundError,
    StorageAPIError,
    ValidationError,
)
from bucketfs.url import DELIMITER

logger = get_logger(__name__)

CANNED_BUCKET_ACLS = frozenset(
    {"private", "public-read", "public-read-write", "authenticated-read"}
)

_OBJECT_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})
_BUCKET_NOT_FOUND_CODES = frozenset({"NoSuchBucket", "404", "NotFound"})


@dataclass(frozen=True)
class BucketStat:
    """A bucket as reported by the store."""

    name: str
    creation_date: datetime


@dataclass(frozen=True)
class ObjectStat:
    """An object, or a common prefix of a delimited listing.

    Common prefixes have a key ending with the delimiter, size 0 and no
    modification time.
    """

    key: str
    size: int = 0
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None


def validate_bucket_acl(acl: str) -> None:
    """Reject anything that is not a canned bucket ACL.

    Raises:
        ValidationError: If ``acl`` is not a canned ACL
    """
    if acl not in CANNED_BUCKET_ACLS:
        raise ValidationError(
            f"Invalid bucket ACL '{acl}'. Must be one of: "
            f"{', '.join(sorted(CANNED_BUCKET_ACLS))}"
        )


class ObjectStorageAPI(ABC):
    """Bucket and key level operations of an object store."""

    delimiter: str = DELIMITER

    @abstractmethod
    def list_buckets(self) -> Iterator[BucketStat]:
        """Yield every bucket."""

    @abstractmethod
    def list_objects(
        self, bucket: str, prefix: str, recursive: bool
    ) -> Iterator[ObjectStat]:
        """Yield objects under ``prefix`` in key order.

        Non-recursive listings group keys on the delimiter and yield each
        group once as a common prefix.
        """

    @abstractmethod
    def stat_object(self, bucket: str, key: str) -> ObjectStat:
        """Return metadata of exactly ``key``.

        Raises:
            ObjectNotFoundError: If no object has that key
        """

    @abstractmethod
    def bucket_exists(self, bucket: str) -> None:
        """Raise ``BucketNotFoundError`` unless ``bucket`` exists."""

    @abstractmethod
    def get_object(
        self, bucket: str, key: str, offset: int = 0, length: int = 0
    ) -> tuple[BinaryIO, ObjectStat]:
        """Open an object for reading; ``length`` 0 reads to the end."""

    @abstractmethod
    def put_object(self, bucket: str, key: str, size: int, data: BinaryIO) -> None:
        """Store ``size`` bytes read from ``data``."""

    @abstractmethod
    def make_bucket(self, bucket: str, acl: str) -> None:
        """Create a bucket with a canned ACL."""

    @abstractmethod
    def set_bucket_acl(self, bucket: str, acl: str) -> None:
        """Replace the canned ACL of a bucket."""


def _translate_error(
    err: Exception, operation: str, bucket: str = "", key: Optional[str] = None
) -> StorageAPIError:
    """Map a botocore exception onto the bucketfs exception hierarchy."""
    code = None
    if isinstance(err, ClientError):
        code = err.response.get("Error", {}).get("Code")

    location = f"{bucket}/{key}" if key else bucket
    message = f"{operation} failed for '{location}': {err}"

    if code == "NoSuchBucket" or (key is None and code in _BUCKET_NOT_FOUND_CODES):
        return BucketNotFoundError(message, code=code, bucket=bucket, key=key)
    if key is not None and code in _OBJECT_NOT_FOUND_CODES:
        return ObjectNotFoundError(message, code=code, bucket=bucket, key=key)
    return StorageAPIError(message, code=code, bucket=bucket, key=key)


class Boto3ObjectStorageAPI(ObjectStorageAPI):
    """ObjectStorageAPI backed by a boto3 S3 client."""

    def __init__(self, client: Any, region_name: str = "us-east-1"):
        """Initialize the API.

        Args:
            client: boto3 S3 client, shared by every call
            region_name: Region new buckets are created in
        """
        self.client = client
        self.region_name = region_name

    def list_buckets(self) -> Iterator[BucketStat]:
        try:
            response = self.client.list_buckets()
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "ListBuckets")
            logger.error("Bucket enumeration failed", error=str(e), code=error.code)
            raise error from e

        for bucket in response.get("Buckets", []):
            yield BucketStat(name=bucket["Name"], creation_date=bucket["CreationDate"])

    def list_objects(
        self, bucket: str, prefix: str, recursive: bool
    ) -> Iterator[ObjectStat]:
        kwargs = {"Bucket": bucket, "Prefix": prefix}
        if not recursive:
            kwargs["Delimiter"] = self.delimiter

        logger.debug(
            "Listing objects", bucket=bucket, prefix=prefix, recursive=recursive
        )

        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(**kwargs):
                objects = (
                    ObjectStat(
                        key=obj["Key"],
                        size=obj.get("Size", 0),
                        last_modified=obj.get("LastModified"),
                        etag=obj.get("ETag"),
                    )
                    for obj in page.get("Contents", [])
                )
                prefixes = (
                    ObjectStat(key=common["Prefix"])
                    for common in page.get("CommonPrefixes", [])
                )
                # Both lists are sorted and pages never overlap
                yield from heapq.merge(objects, prefixes, key=lambda stat: stat.key)
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "ListObjects", bucket)
            logger.error(
                "Object enumeration failed",
                bucket=bucket,
                prefix=prefix,
                error=str(e),
                code=error.code,
            )
            raise error from e

    def stat_object(self, bucket: str, key: str) -> ObjectStat:
        try:
            response = self.client.head_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise _translate_error(e, "StatObject", bucket, key) from e

        return ObjectStat(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response.get("LastModified"),
            etag=response.get("ETag"),
        )

    def bucket_exists(self, bucket: str) -> None:
        try:
            self.client.head_bucket(Bucket=bucket)
        except (BotoCoreError, ClientError) as e:
            raise _translate_error(e, "BucketExists", bucket) from e

    def get_object(
        self, bucket: str, key: str, offset: int = 0, length: int = 0
    ) -> tuple[BinaryIO, ObjectStat]:
        if offset < 0 or length < 0:
            raise ValidationError(
                f"Offset and length must not be negative: {offset}, {length}"
            )

        kwargs = {"Bucket": bucket, "Key": key}
        if length > 0:
            kwargs["Range"] = f"bytes={offset}-{offset + length - 1}"
        elif offset > 0:
            kwargs["Range"] = f"bytes={offset}-"

        try:
            response = self.client.get_object(**kwargs)
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "GetObject", bucket, key)
            logger.error("Object read failed", bucket=bucket, key=key, error=str(e))
            raise error from e

        stat = ObjectStat(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response.get("LastModified"),
            etag=response.get("ETag"),
        )
        return response["Body"], stat

    def put_object(self, bucket: str, key: str, size: int, data: BinaryIO) -> None:
        try:
            self.client.put_object(
                Bucket=bucket, Key=key, Body=data, ContentLength=size
            )
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "PutObject", bucket, key)
            logger.error("Object write failed", bucket=bucket, key=key, error=str(e))
            raise error from e

        logger.info("Object written", bucket=bucket, key=key, size=size)

    def make_bucket(self, bucket: str, acl: str) -> None:
        validate_bucket_acl(acl)

        kwargs: dict[str, Any] = {"Bucket": bucket, "ACL": acl}
        # us-east-1 rejects an explicit location constraint
        if self.region_name != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {
                "LocationConstraint": self.region_name
            }

        try:
            self.client.create_bucket(**kwargs)
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "MakeBucket", bucket)
            logger.error("Bucket creation failed", bucket=bucket, error=str(e))
            raise error from e

        logger.info("Bucket created", bucket=bucket, region=self.region_name)

    def set_bucket_acl(self, bucket: str, acl: str) -> None:
        validate_bucket_acl(acl)

        try:
            self.client.put_bucket_acl(Bucket=bucket, ACL=acl)
        except (BotoCoreError, ClientError) as e:
            error = _translate_error(e, "SetBucketACL", bucket)
            logger.error("Bucket ACL update failed", bucket=bucket, error=str(e))
            raise error from e

        logger.info("Bucket ACL updated", bucket=bucket, acl=acl)
