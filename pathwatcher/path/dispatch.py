"""
Serial execution context for snapshot delivery.

Callbacks never run on the monitor thread. They are queued onto a single
worker thread, in submission order, so that consumers update their state
from one designated context and never see two deliveries at once.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from ..logging_config import get_logger

logger = get_logger(__name__)


class SerialDispatcher:
    """A FIFO, single-threaded execution context."""

    def __init__(self, name="pathwatcher-updates"):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._thread_ident = None
        self._closed = False
        self._lock = threading.Lock()

    def _run(self, fn, args):
        self._thread_ident = threading.get_ident()
        try:
            fn(*args)
        except Exception:
            logger.exception(f"Error in callback dispatched on {self.name}")

    def submit(self, fn, *args):
        """
        Queue ``fn(*args)`` and return immediately.

        Returns:
            Future, or None if the dispatcher has been shut down
        """
        with self._lock:
            if self._closed:
                logger.debug(f"Dispatcher {self.name} is shut down, dropping work")
                return None
            return self._executor.submit(self._run, fn, args)

    def is_current(self):
        """Whether the calling thread is this dispatcher's worker."""
        return self._thread_ident == threading.get_ident()

    def flush(self, timeout=None):
        """Block until everything queued so far has run."""
        if self.is_current():
            return True
        future = self.submit(lambda: None)
        if future is None:
            return True
        future.result(timeout=timeout)
        return True

    def shutdown(self, wait=True):
        """Stop accepting work; optionally wait for queued work to finish."""
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait and not self.is_current())
