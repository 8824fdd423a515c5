"""Test configuration and fixtures for bucketfs."""

import io
from datetime import datetime, timezone
from typing import Optional

import boto3
import pytest
from moto import mock_aws

from bucketfs.core.exceptions import (
    BucketNotFoundError,
    ObjectNotFoundError,
    StorageAPIError,
)
from bucketfs.objectstorage import BucketStat, ObjectStat, ObjectStorageAPI
from bucketfs.objectstorage.clients import S3ClientConfig

CREATED = datetime(2020, 1, 1, tzinfo=timezone.utc)
MODIFIED = datetime(2021, 6, 1, 12, 30, tzinfo=timezone.utc)


class FakeObjectStorageAPI(ObjectStorageAPI):
    """In-memory object store with error injection.

    Keys are kept sorted like a real store lists them. ``list_errors`` maps a
    bucket to an error raised after its objects have been listed, and
    ``bucket_list_error`` is raised after every bucket has been listed.
    """

    def __init__(self):
        self.buckets: dict[str, dict[str, ObjectStat]] = {}
        self.acls: dict[str, str] = {}
        self.list_errors: dict[str, Exception] = {}
        self.bucket_list_error: Optional[Exception] = None
        self.stat_error: Optional[Exception] = None
        self.calls: list[tuple] = []
        self.creation_date = CREATED
        self.last_modified = MODIFIED

    def add_bucket(self, name: str) -> None:
        self.buckets.setdefault(name, {})

    def add_object(self, bucket: str, key: str, size: int = 1) -> None:
        self.add_bucket(bucket)
        self.buckets[bucket][key] = ObjectStat(
            key=key, size=size, last_modified=self.last_modified, etag=f'"{key}"'
        )

    def list_buckets(self):
        self.calls.append(("list_buckets",))
        for name in self.buckets:
            yield BucketStat(name=name, creation_date=self.creation_date)
        if self.bucket_list_error is not None:
            raise self.bucket_list_error

    def list_objects(self, bucket, prefix, recursive):
        self.calls.append(("list_objects", bucket, prefix, recursive))
        if bucket not in self.buckets:
            raise BucketNotFoundError(f"No such bucket: {bucket}", code="NoSuchBucket")

        objects = self.buckets[bucket]
        seen_prefixes = set()
        for key in sorted(k for k in objects if k.startswith(prefix)):
            if not recursive:
                rest = key[len(prefix) :]
                index = rest.find(self.delimiter)
                if index >= 0:
                    common = prefix + rest[: index + 1]
                    if common not in seen_prefixes:
                        seen_prefixes.add(common)
                        yield ObjectStat(key=common)
                    continue
            yield objects[key]

        if bucket in self.list_errors:
            raise self.list_errors[bucket]

    def stat_object(self, bucket, key):
        self.calls.append(("stat_object", bucket, key))
        if self.stat_error is not None:
            raise self.stat_error
        try:
            return self.buckets[bucket][key]
        except KeyError:
            raise ObjectNotFoundError(
                f"No such key: {bucket}/{key}", code="NoSuchKey", bucket=bucket, key=key
            )

    def bucket_exists(self, bucket):
        self.calls.append(("bucket_exists", bucket))
        if bucket not in self.buckets:
            raise BucketNotFoundError(f"No such bucket: {bucket}", code="404")

    def get_object(self, bucket, key, offset=0, length=0):
        stat = self.stat_object(bucket, key)
        data = b"x" * stat.size
        data = data[offset : offset + length] if length else data[offset:]
        return io.BytesIO(data), ObjectStat(key=key, size=len(data))

    def put_object(self, bucket, key, size, data):
        if bucket not in self.buckets:
            raise StorageAPIError(f"No such bucket: {bucket}", code="NoSuchBucket")
        data.read(size)
        self.add_object(bucket, key, size)

    def make_bucket(self, bucket, acl):
        self.add_bucket(bucket)
        self.acls[bucket] = acl

    def set_bucket_acl(self, bucket, acl):
        self.acls[bucket] = acl


@pytest.fixture
def fake_api():
    """Empty in-memory object store."""
    return FakeObjectStorageAPI()


@pytest.fixture
def photos_api(fake_api):
    """In-memory store with a 'photos' bucket holding a small hierarchy."""
    for key in ("a.jpg", "2020/jan.jpg", "2020/feb.jpg"):
        fake_api.add_object("photos", key)
    return fake_api


@pytest.fixture
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def s3(aws_credentials):
    """Mocked S3 client."""
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


@pytest.fixture
def s3_config():
    """Client configuration matching the mocked S3 service."""
    return S3ClientConfig(
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )


@pytest.fixture
def photos_bucket(s3):
    """Mocked 'photos' bucket holding a small hierarchy."""
    s3.create_bucket(Bucket="photos")
    s3.put_object(Bucket="photos", Key="a.jpg", Body=b"jpeg-a")
    s3.put_object(Bucket="photos", Key="2020/jan.jpg", Body=b"jpeg-jan")
    s3.put_object(Bucket="photos", Key="2020/feb.jpg", Body=b"jpeg-feb!")
    return s3
