"""Region lookup for well-known S3 endpoint hosts."""

from types import MappingProxyType
from typing import Optional

ENDPOINT_REGIONS = MappingProxyType(
    {
        "s3-fips-us-gov-west-1.amazonaws.com": "us-gov-west-1",
        "s3.amazonaws.com": "us-east-1",
        "s3-us-west-1.amazonaws.com": "us-west-1",
        "s3-us-west-2.amazonaws.com": "us-west-2",
        "s3-eu-west-1.amazonaws.com": "eu-west-1",
        "s3-eu-central-1.amazonaws.com": "eu-central-1",
        "s3-ap-southeast-1.amazonaws.com": "ap-southeast-1",
        "s3-ap-southeast-2.amazonaws.com": "ap-southeast-2",
        "s3-ap-northeast-1.amazonaws.com": "ap-northeast-1",
        "s3-sa-east-1.amazonaws.com": "sa-east-1",
        "s3.cn-north-1.amazonaws.com.cn": "cn-north-1",
    }
)


def get_region(host: str) -> Optional[str]:
    """Return the region served by an endpoint host, if it is a known one.

    Args:
        host: Endpoint host, optionally with a port

    Returns:
        Region code, or None for unknown hosts (MinIO, other S3-compatibles)
    """
    return ENDPOINT_REGIONS.get(host.lower().split(":", 1)[0])
