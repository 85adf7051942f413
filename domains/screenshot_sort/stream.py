"""
Event stream shared by the watcher, the shutdown coordinator and the watch loop.

Producers (the watchdog observer thread and the signal thread) ``send`` items;
the watch loop is the only consumer and blocks in ``receive``. An item is
either a watchdog ``FileSystemEvent`` or a ``StreamError``.
"""

import queue
import threading
from typing import Union

from watchdog.events import FileSystemEvent


class StreamError(Exception):
    """Error item carried by the stream."""


class ShutdownSentinel(StreamError):
    """Injected by the shutdown coordinator to unblock the watch loop."""

    def __init__(self, signal_name: str):
        super().__init__(signal_name)
        self.signal_name = signal_name


class StreamClosed(Exception):
    """No item will ever arrive on the stream again."""


StreamItem = Union[FileSystemEvent, StreamError]

_CLOSED = object()


class EventStream:
    """Unbounded multi-producer, single-consumer FIFO of stream items."""

    def __init__(self):
        self._queue: "queue.SimpleQueue[object]" = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: StreamItem) -> bool:
        """
        Append ``item`` to the stream.

        Returns:
            False if the stream is closed and the item was dropped
        """
        with self._lock:
            if self._closed:
                return False
            self._queue.put(item)
            return True

    def close(self) -> None:
        """Close the stream; items already sent are still delivered."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def receive(self) -> StreamItem:
        """
        Block until the next item arrives.

        Raises:
            StreamClosed: If the stream is closed and drained
        """
        item = self._queue.get()
        if item is _CLOSED:
            # Leave the marker for any later receive call
            self._queue.put(_CLOSED)
            raise StreamClosed("event stream closed")
        return item
