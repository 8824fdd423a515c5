"""Generic storage client abstraction.

Every storage backend exposes the same small surface: stat a location, list
it (shallow or recursive), read and write objects, and manage buckets.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO

from bucketfs.streaming import ListingStream
from bucketfs.url import StorageURL


@dataclass(frozen=True)
class Entry:
    """A single file or directory in a hierarchical view of storage.

    Attributes:
        name: Name relative to the addressed location
        size: Size in bytes, 0 for directories
        mod_time: Last modification time; the listing time for virtual directories
        is_directory: True for buckets and virtual directories
    """

    name: str
    size: int
    mod_time: datetime
    is_directory: bool = False


class Client(ABC):
    """Operations every storage client supports."""

    @property
    @abstractmethod
    def url(self) -> StorageURL:
        """The location this client addresses."""

    @abstractmethod
    def stat(self) -> Entry:
        """Describe what is at the addressed location."""

    @abstractmethod
    def list(self, recursive: bool = False) -> ListingStream:
        """Stream the entries at the addressed location."""

    @abstractmethod
    def get_object(self, offset: int = 0, length: int = 0) -> tuple[BinaryIO, int]:
        """Open the addressed object for reading.

        Returns:
            Tuple of (byte stream, number of bytes the stream will yield)
        """

    @abstractmethod
    def put_object(self, size: int, data: BinaryIO) -> None:
        """Write ``size`` bytes from ``data`` to the addressed object."""

    @abstractmethod
    def make_bucket(self) -> None:
        """Create the addressed bucket."""

    @abstractmethod
    def set_bucket_acl(self, acl: str) -> None:
        """Apply a canned ACL to the addressed bucket."""
