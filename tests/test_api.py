"""Tests for the boto3 object storage API."""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from bucketfs.core.exceptions import (
    BucketNotFoundError,
    ObjectNotFoundError,
    StorageAPIError,
    ValidationError,
)
from bucketfs.objectstorage import Boto3ObjectStorageAPI
from bucketfs.objectstorage.api import validate_bucket_acl


def _client_error(code, operation="HeadObject"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestBoto3ObjectStorageAPI:
    """Test the API against mocked S3."""

    def test_list_buckets(self, photos_bucket):
        """Test buckets are reported with their creation date."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        buckets = list(api.list_buckets())

        assert [bucket.name for bucket in buckets] == ["photos"]
        assert buckets[0].creation_date is not None

    def test_delimited_listing_merges_prefixes(self, photos_bucket):
        """Test objects and common prefixes come back in one key order."""
        photos_bucket.put_object(Bucket="photos", Key="b/c.jpg", Body=b"")
        photos_bucket.put_object(Bucket="photos", Key="0.jpg", Body=b"")
        api = Boto3ObjectStorageAPI(photos_bucket)

        keys = [stat.key for stat in api.list_objects("photos", "", recursive=False)]

        assert keys == ["0.jpg", "2020/", "a.jpg", "b/"]

    def test_common_prefix_stat(self, photos_bucket):
        """Test common prefixes have no size or modification time."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        stats = list(api.list_objects("photos", "", recursive=False))

        assert stats[0].key == "2020/"
        assert stats[0].size == 0
        assert stats[0].last_modified is None

    def test_recursive_listing(self, photos_bucket):
        """Test recursive listings ignore the delimiter."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        listing = api.list_objects("photos", "2020/", recursive=True)
        keys = [stat.key for stat in listing]

        assert keys == ["2020/feb.jpg", "2020/jan.jpg"]

    def test_list_missing_bucket(self, s3):
        """Test listing a missing bucket raises BucketNotFoundError."""
        api = Boto3ObjectStorageAPI(s3)

        with pytest.raises(BucketNotFoundError) as exc_info:
            list(api.list_objects("missing", "", recursive=True))

        assert exc_info.value.code == "NoSuchBucket"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_stat_object(self, photos_bucket):
        """Test object metadata."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        stat = api.stat_object("photos", "a.jpg")

        assert stat.key == "a.jpg"
        assert stat.size == 6
        assert stat.last_modified is not None

    def test_stat_missing_object(self, photos_bucket):
        """Test a missing key is the not-found class."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        with pytest.raises(ObjectNotFoundError) as exc_info:
            api.stat_object("photos", "missing.jpg")

        assert exc_info.value.bucket == "photos"
        assert exc_info.value.key == "missing.jpg"

    def test_bucket_exists(self, photos_bucket):
        """Test bucket existence checks."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        api.bucket_exists("photos")
        with pytest.raises(BucketNotFoundError):
            api.bucket_exists("missing")

    def test_get_object_negative_range(self, photos_bucket):
        """Test negative offsets are rejected before calling the store."""
        api = Boto3ObjectStorageAPI(photos_bucket)

        with pytest.raises(ValidationError):
            api.get_object("photos", "a.jpg", offset=-1)

    def test_make_bucket_outside_us_east_1(self, s3):
        """Test buckets are created in the configured region."""
        regional = boto3.client("s3", region_name="eu-west-1")
        api = Boto3ObjectStorageAPI(regional, region_name="eu-west-1")

        api.make_bucket("european", "private")

        location = regional.get_bucket_location(Bucket="european")
        assert location["LocationConstraint"] == "eu-west-1"


class TestErrorTranslation:
    """Test mapping of botocore errors."""

    @pytest.mark.parametrize("code", ["NoSuchKey", "404", "NotFound"])
    def test_object_not_found_codes(self, code):
        """Test every not-found spelling of head/get object."""
        client = MagicMock()
        client.head_object.side_effect = _client_error(code)
        api = Boto3ObjectStorageAPI(client)

        with pytest.raises(ObjectNotFoundError) as exc_info:
            api.stat_object("bucket", "key")

        assert exc_info.value.code == code

    def test_missing_bucket_on_object_lookup(self):
        """Test NoSuchBucket is not mistaken for a missing key."""
        client = MagicMock()
        client.head_object.side_effect = _client_error("NoSuchBucket")
        api = Boto3ObjectStorageAPI(client)

        with pytest.raises(BucketNotFoundError):
            api.stat_object("bucket", "key")

    def test_other_client_errors(self):
        """Test other codes stay generic storage errors."""
        client = MagicMock()
        client.head_object.side_effect = _client_error("AccessDenied")
        api = Boto3ObjectStorageAPI(client)

        with pytest.raises(StorageAPIError) as exc_info:
            api.stat_object("bucket", "key")

        assert not isinstance(exc_info.value, ObjectNotFoundError)
        assert exc_info.value.code == "AccessDenied"

    def test_transport_errors(self):
        """Test botocore transport errors are wrapped with their cause."""
        client = MagicMock()
        cause = EndpointConnectionError(endpoint_url="http://nowhere")
        client.list_buckets.side_effect = cause
        api = Boto3ObjectStorageAPI(client)

        with pytest.raises(StorageAPIError) as exc_info:
            list(api.list_buckets())

        assert exc_info.value.code is None
        assert exc_info.value.__cause__ is cause


class TestValidateBucketAcl:
    """Test canned ACL validation."""

    @pytest.mark.parametrize(
        "acl", ["private", "public-read", "public-read-write", "authenticated-read"]
    )
    def test_canned_acls(self, acl):
        validate_bucket_acl(acl)

    def test_unknown_acl(self):
        with pytest.raises(ValidationError, match="Invalid bucket ACL"):
            validate_bucket_acl("bucket-owner-full-control")
