"""Filesystem view of S3-compatible object storage.

``S3Client`` implements the generic ``Client`` operations for one storage URL.
The URL path decides what is addressed:

    s3://                   the storage root, whose directories are buckets
    s3://photos             a bucket
    s3://photos/2020/       a prefix, listed as a directory
    s3://photos/a.jpg       an object, or a prefix if no such object exists
"""

from typing import BinaryIO, Generator, Optional, Union

from bucketfs.client import Client, Entry
from bucketfs.core import get_logger, get_tracer
from bucketfs.core.exceptions import (
    InvalidQueryURL,
    ObjectNotFoundError,
    ValidationError,
)
from bucketfs.streaming import ListingStream
from bucketfs.url import StorageURL

from .api import Boto3ObjectStorageAPI, ObjectStorageAPI
from .clients import S3ClientConfig, S3ClientManager
from .listing import list_prefix, list_recursive, list_shallow
from .listing.entries import directory_entry, file_entry
from .paths import resolve_bucket_and_key

logger = get_logger(__name__)
tracer = get_tracer(__name__)

DEFAULT_BUCKET_ACL = "private"


class S3Client(Client):
    """Storage client for one location in an S3-compatible store."""

    def __init__(self, url: StorageURL, api: ObjectStorageAPI):
        """Initialize the client.

        Args:
            url: Location this client addresses
            api: Object storage API, may be shared between clients
        """
        self._url = url
        self.api = api

    @property
    def url(self) -> StorageURL:
        return self._url

    def _bucket_and_key(self) -> tuple[str, str]:
        return resolve_bucket_and_key(self._url.path, self.api.delimiter)

    def _bucket_only(self) -> str:
        """Return the addressed bucket, rejecting URLs that go below it."""
        bucket, key = self._bucket_and_key()
        if key:
            raise InvalidQueryURL(str(self._url))
        if not bucket:
            raise ValidationError(f"URL does not address a bucket: {self._url}")
        return bucket

    def _object_address(self) -> tuple[str, str]:
        bucket, key = self._bucket_and_key()
        if not key:
            raise ValidationError(f"URL does not address an object: {self._url}")
        return bucket, key

    def stat(self) -> Entry:
        """Describe the storage root, a bucket, an object or a directory.

        An object key that does not exist may still be a directory: if a
        one-level listing of it as a prefix finds anything, it is reported as
        a directory named after the key.

        The storage root is a directory once bucket enumeration yields a
        result. A store without buckets is asked about the empty bucket name,
        which normally fails.

        Raises:
            ObjectNotFoundError: If neither an object nor a prefix exists
            StorageAPIError: For any other failure of the store
        """
        bucket, key = self._bucket_and_key()
        with tracer.start_as_current_span(
            "bucketfs.stat",
            attributes={"bucketfs.bucket": bucket, "bucketfs.key": key},
        ):
            if key:
                return self._stat_key(bucket, key)

            if not bucket and self._has_buckets():
                return directory_entry("")

            # Without buckets the root is only confirmed by the store itself
            self.api.bucket_exists(bucket)
            return directory_entry(bucket)

    def _has_buckets(self) -> bool:
        """Whether any bucket is listed; enumeration errors propagate."""
        for _ in self.api.list_buckets():
            return True
        return False

    def _stat_key(self, bucket: str, key: str) -> Entry:
        delimiter = self.api.delimiter
        try:
            stat = self.api.stat_object(bucket, key)
        except ObjectNotFoundError:
            logger.debug("No object at key, probing as prefix", bucket=bucket, key=key)
            listing = list_prefix(self.api, bucket, key, delimiter)
            try:
                first = next(listing, None)
            finally:
                listing.close()
            if first is None:
                raise
            return directory_entry(key)

        return file_entry(stat.key, stat)

    def list(self, recursive: bool = False) -> ListingStream:
        """Stream the entries at the addressed location.

        Args:
            recursive: List every object below the location instead of one level

        Returns:
            Stream of entries, ending with the first error if one occurs
        """
        bucket, key = self._bucket_and_key()
        delimiter = self.api.delimiter

        logger.info(
            "Listing storage",
            url=str(self._url),
            bucket=bucket,
            key=key,
            recursive=recursive,
        )

        if recursive:
            producer = list_recursive(self.api, bucket, key, self._url.path, delimiter)
        else:
            producer = list_shallow(self.api, bucket, key, delimiter)

        span_attributes = {
            "bucketfs.bucket": bucket,
            "bucketfs.key": key,
            "bucketfs.recursive": recursive,
        }
        return ListingStream(
            _traced(producer, "bucketfs.list", span_attributes),
            name="list-recursive" if recursive else "list",
        )

    def get_object(self, offset: int = 0, length: int = 0) -> tuple[BinaryIO, int]:
        bucket, key = self._object_address()
        with tracer.start_as_current_span(
            "bucketfs.get_object",
            attributes={"bucketfs.bucket": bucket, "bucketfs.key": key},
        ):
            body, stat = self.api.get_object(bucket, key, offset, length)
        logger.debug("Object opened", bucket=bucket, key=key, size=stat.size)
        return body, stat.size

    def put_object(self, size: int, data: BinaryIO) -> None:
        bucket, key = self._object_address()
        with tracer.start_as_current_span(
            "bucketfs.put_object",
            attributes={
                "bucketfs.bucket": bucket,
                "bucketfs.key": key,
                "bucketfs.size": size,
            },
        ):
            self.api.put_object(bucket, key, size, data)

    def make_bucket(self) -> None:
        bucket = self._bucket_only()
        self.api.make_bucket(bucket, DEFAULT_BUCKET_ACL)

    def set_bucket_acl(self, acl: str) -> None:
        bucket = self._bucket_only()
        self.api.set_bucket_acl(bucket, acl)


def _traced(
    producer: Generator[Entry, None, None], span_name: str, attributes: dict
) -> Generator[Entry, None, None]:
    """Run a listing generator inside a span on the producing thread."""
    with tracer.start_as_current_span(span_name, attributes=attributes):
        yield from producer


def new_s3_client(
    url: Union[str, StorageURL], config: Optional[S3ClientConfig] = None
) -> S3Client:
    """Create an S3Client for a URL.

    For ``http(s)://host/bucket/key`` URLs the host is used as the endpoint,
    unless the configuration names one explicitly.

    Args:
        url: Storage URL, as a string or parsed
        config: S3 client configuration, defaults to the default credential chain

    Returns:
        Client addressing the URL
    """
    storage_url = url if isinstance(url, StorageURL) else StorageURL.parse(url)
    config = config or S3ClientConfig()

    if storage_url.endpoint and not config.endpoint_url:
        config = config.model_copy(update={"endpoint_url": storage_url.endpoint})

    manager = S3ClientManager(config)
    api = Boto3ObjectStorageAPI(manager.client, region_name=manager.region_name)
    return S3Client(storage_url, api)
