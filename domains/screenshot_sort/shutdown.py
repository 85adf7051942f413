"""
Shutdown coordinator for the Screenshot Sort watcher.

Turns SIGINT/SIGTERM into a ``ShutdownSentinel`` on the event stream so the
watch loop's blocking receive returns. The signals are blocked in every thread
and collected with ``signal.sigwait`` on a dedicated thread.
"""

import signal
import threading
from typing import Callable, Iterable, Optional

from loguru import logger

from domains.screenshot_sort.stream import EventStream, ShutdownSentinel

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

SIGNAL_MESSAGES = {
    signal.SIGINT: "CTRL-C received, terminating...",
    signal.SIGTERM: "Terminate received, finishing...",
}


class ShutdownCoordinator:
    """Bridge external termination signals into the event stream."""

    def __init__(
        self,
        stream: EventStream,
        shutdown_requested: threading.Event,
        signals: Iterable[signal.Signals] = SHUTDOWN_SIGNALS,
        wait: Callable[[Iterable[int]], int] = signal.sigwait,
    ):
        """
        Initialize shutdown coordinator.

        Args:
            stream: Stream consumed by the watch loop
            shutdown_requested: Flag read by the watch loop on stream errors
            signals: Signals that request shutdown
            wait: Blocking signal wait, ``signal.sigwait`` by default
        """
        self.stream = stream
        self.shutdown_requested = shutdown_requested
        self.signals = frozenset(signals)
        self._wait = wait
        self._thread: Optional[threading.Thread] = None

    def install(self):
        """
        Block the shutdown signals so only ``sigwait`` receives them.

        Must run on the main thread before any other thread is started, since
        new threads inherit the signal mask.

        Raises:
            OSError: If the signal mask cannot be changed
        """
        signal.pthread_sigmask(signal.SIG_BLOCK, self.signals)
        logger.debug(f"Blocked signals: {sorted(s.name for s in self.signals)}")

    def start(self) -> threading.Thread:
        """Start the signal listener thread."""
        self._thread = threading.Thread(
            target=self.run, name="shutdown-coordinator", daemon=True
        )
        self._thread.start()
        return self._thread

    def run(self):
        """Wait for one shutdown signal, then request shutdown and return."""
        while True:
            signum = self._wait(self.signals)
            if signum in self.signals:
                break

        sig = signal.Signals(signum)
        logger.info(SIGNAL_MESSAGES.get(sig, f"{sig.name} received, terminating..."))
        self.request_shutdown(sig.name)

    def request_shutdown(self, reason: str):
        """
        Flag shutdown and push the sentinel into the stream.

        The flag is set first so the loop sees it when the sentinel arrives.
        """
        self.shutdown_requested.set()
        self.stream.send(ShutdownSentinel(reason))
