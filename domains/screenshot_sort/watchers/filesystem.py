"""
File system watcher for the Screenshot Sort domain.

Watches the screenshot root (non-recursively) with watchdog and sorts every
file as soon as the handle that wrote it is closed.
"""

import os
import threading
from pathlib import Path

from loguru import logger
from watchdog.events import FileClosedEvent, FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from domains.screenshot_sort.latest import update_latest
from domains.screenshot_sort.reconciler import update_file
from domains.screenshot_sort.stream import EventStream, StreamClosed, StreamError

EXIT_OK = 0
EXIT_FAILURE = 1


class ScreenshotEventHandler(FileSystemEventHandler):
    """Forwards every watchdog event into the event stream."""

    def __init__(self, stream: EventStream):
        super().__init__()
        self.stream = stream

    def on_any_event(self, event: FileSystemEvent):
        self.stream.send(event)


class ScreenshotWatcher:
    """Owns the watchdog observer for one screenshot root."""

    def __init__(self, root: Path, stream: EventStream):
        """
        Initialize screenshot watcher.

        Args:
            root: Watched screenshot directory
            stream: Stream the observer thread produces into

        Raises:
            OSError: If the directory cannot be watched
        """
        self.root = root
        self.stream = stream
        self.event_handler = ScreenshotEventHandler(stream)

        self.observer = Observer()
        self.observer.schedule(self.event_handler, str(root), recursive=False)

    def start_watching(self):
        """Start the observer thread."""
        logger.info(f'Watcher starting for "{self.root}"')
        self.observer.start()

    def stop_watching(self):
        """Stop the observer and close the stream."""
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
        self.stream.close()
        logger.info("File system observer stopped")


def event_paths(event: FileSystemEvent) -> list[Path]:
    """Return the paths an event refers to, source first."""
    paths = [event.src_path, getattr(event, "dest_path", "")]
    return [Path(os.fsdecode(p)) for p in paths if p]


class WatchLoop:
    """
    Consume the event stream until shutdown.

    States: running while real events arrive; draining once the shutdown flag
    is set and the sentinel is still on its way; terminated when ``run``
    returns its exit code.
    """

    def __init__(self, root: Path, stream: EventStream, shutdown_requested: threading.Event):
        self.root = root
        self.stream = stream
        self.shutdown_requested = shutdown_requested

    @property
    def state(self) -> str:
        return "draining" if self.shutdown_requested.is_set() else "running"

    def dispatch(self, event: FileSystemEvent) -> bool:
        """
        Sort the files reported by a close-write event.

        Other event kinds are ignored. ``latest`` is refreshed once if at
        least one file was handled.

        Returns:
            True if at least one file was handled
        """
        if not isinstance(event, FileClosedEvent):
            return False

        work_done = False
        for path in event_paths(event):
            if not path.is_file():
                continue
            work_done = True
            try:
                update_file(self.root, path)
            except OSError as e:
                logger.error(f'Error while handling "{path}": {e}')

        if work_done:
            try:
                update_latest(self.root)
            except OSError as e:
                logger.error(f'Error while updating "latest" link: {e}')

        return work_done

    def run(self) -> int:
        """
        Block on the stream and dispatch items in arrival order.

        Returns:
            Exit code: 0 for a requested shutdown, 1 for any other error
        """
        while True:
            try:
                item = self.stream.receive()
            except StreamClosed as e:
                logger.error(f"Error receiving watcher event: {e}")
                return EXIT_FAILURE

            if isinstance(item, StreamError):
                logger.debug(f"Stream error while {self.state}: {item!r}")
                if self.shutdown_requested.is_set():
                    logger.success("Shutdown complete")
                    return EXIT_OK

                logger.error(f"Error with watcher event: {item}")
                return EXIT_FAILURE

            self.dispatch(item)
