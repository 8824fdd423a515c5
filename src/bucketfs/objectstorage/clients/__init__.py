"""S3 client management and configuration."""

from .regions import ENDPOINT_REGIONS, get_region
from .s3_client import S3ClientConfig, S3ClientManager

__all__ = ["ENDPOINT_REGIONS", "S3ClientConfig", "S3ClientManager", "get_region"]
