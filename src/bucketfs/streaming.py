"""Streaming of listing results from a producer thread.

A listing runs as an independent producer that publishes entries into a
bounded queue while the caller consumes them. The producer blocks once the
queue is full, so nothing beyond ``settings.listing_queue_size`` entries is
ever buffered, and entries arrive in exactly the order they were produced.

The first exception raised by the producer is delivered to the consumer once,
after every entry produced before it, and ends the stream:

    >>> with client.list(recursive=True) as entries:
    ...     for entry in entries:
    ...         print(entry.name)
"""

import queue
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generator, Optional

from bucketfs.core import get_logger, settings

if TYPE_CHECKING:
    from bucketfs.client import Entry

logger = get_logger(__name__)

_END = object()


@dataclass(frozen=True)
class _Failure:
    error: Exception


class ListingStream:
    """Iterator over entries published by a dedicated producer thread."""

    def __init__(self, producer: Generator["Entry", None, None], name: str = "list"):
        """Start producing.

        Args:
            producer: Generator yielding entries; any exception it raises
                terminates the stream
            name: Short label used for the thread name and log events
        """
        self._producer = producer
        self._name = name
        self._queue: queue.Queue = queue.Queue(maxsize=settings.listing_queue_size)
        self._stop = threading.Event()
        self._done = False
        self._thread = threading.Thread(
            target=self._run, name=f"bucketfs-{name}", daemon=True
        )
        self._thread.start()

    def _publish(self, item: object) -> bool:
        """Block until the consumer has room for ``item`` or the stream is closed."""
        while not self._stop.is_set():
            try:
                self._queue.put(item, timeout=settings.listing_poll_interval)
                return True
            except queue.Full:
                continue
        return False

    def _run(self) -> None:
        produced = 0
        try:
            for entry in self._producer:
                if not self._publish(entry):
                    logger.debug(
                        "Listing abandoned", listing=self._name, produced=produced
                    )
                    return
                produced += 1
        except Exception as e:
            logger.warning(
                "Listing aborted", listing=self._name, produced=produced, error=str(e)
            )
            # The error is the last item; no end marker follows it
            self._publish(_Failure(e))
            return
        finally:
            self._producer.close()

        self._publish(_END)
        logger.debug("Listing completed", listing=self._name, produced=produced)

    def __iter__(self) -> "ListingStream":
        return self

    def __next__(self) -> "Entry":
        if self._done:
            raise StopIteration

        item = self._next_item()
        if item is _END:
            self._done = True
            raise StopIteration
        if isinstance(item, _Failure):
            self.close()
            raise item.error
        return item

    def _next_item(self) -> object:
        """Wait for the next published item, giving up once the stream is closed."""
        while True:
            try:
                return self._queue.get(timeout=settings.listing_poll_interval)
            except queue.Empty:
                if self._stop.is_set():
                    return _END

    def close(self) -> None:
        """Stop consuming; the producer exits at its next publish attempt."""
        self._done = True
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the producer thread to exit.

        Returns:
            True if the producer has exited
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> "ListingStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
