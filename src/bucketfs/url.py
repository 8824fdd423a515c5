"""Storage URL handling.

A storage URL is reduced to ``(scheme, host, path)``. Two spellings are
accepted for object storage:

    https://s3.amazonaws.com/bucket/key   host-style endpoint, path carries the bucket
    s3://bucket/key                       the bucket is folded into the path

Both produce the path ``/bucket/key``, which is all the listing engine looks at.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from bucketfs.core import get_logger
from bucketfs.core.exceptions import ValidationError

logger = get_logger(__name__)

DELIMITER = "/"


@dataclass(frozen=True)
class StorageURL:
    """An addressable storage location."""

    scheme: str
    host: str
    path: str

    @classmethod
    def parse(cls, url: str) -> "StorageURL":
        """Parse a URL string into a StorageURL.

        Args:
            url: URL in the form ``scheme://host/path`` or ``s3://bucket/key``

        Returns:
            Parsed StorageURL

        Raises:
            ValidationError: If the URL has no scheme
        """
        # Keys may contain "?" and "#", neither starts a query or fragment here
        parsed = urlsplit(url, allow_fragments=False)
        if not parsed.scheme:
            raise ValidationError(f"URL must include a scheme: {url}")

        raw_path = parsed.path
        if "?" in url:
            raw_path += "?" + parsed.query

        scheme = parsed.scheme.lower()
        if scheme == "s3":
            host = ""
            path = raw_path
            if parsed.netloc:
                path = DELIMITER + parsed.netloc + raw_path
        else:
            host = parsed.netloc
            path = raw_path

        logger.debug("Storage URL parsed", scheme=scheme, host=host, path=path)
        return cls(scheme=scheme, host=host, path=path)

    @property
    def endpoint(self) -> str:
        """Endpoint URL (``scheme://host``), empty for ``s3://`` URLs."""
        if not self.host:
            return ""
        return f"{self.scheme}://{self.host}"

    def __str__(self) -> str:
        if self.scheme == "s3":
            return f"s3:/{self.path}" if self.path else "s3://"
        return f"{self.scheme}://{self.host}{self.path}"
