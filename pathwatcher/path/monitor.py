"""
Path monitors: the platform facility that reports network path changes.

A monitor owns one background thread. It reads the path once when started
and again on every change, calling its handler serially on that thread.

Two implementations exist:
- SystemConfigurationPathMonitor: macOS, driven by SCDynamicStore
  notifications on a dedicated CFRunLoop.
- PollingPathMonitor: any platform psutil and the routing table queries
  cover; re-reads the path on an interval and reports differences.
"""

import sys
import threading

try:
    from CoreFoundation import (
        CFRunLoopAddSource,
        CFRunLoopGetCurrent,
        CFRunLoopRunInMode,
        kCFRunLoopDefaultMode,
    )
    from SystemConfiguration import (
        SCDynamicStoreCreate,
        SCDynamicStoreCreateRunLoopSource,
        SCDynamicStoreSetNotificationKeys,
    )
except ImportError:
    SCDynamicStoreCreate = None

from .. import config
from ..logging_config import get_logger
from .reader import read_current_path

logger = get_logger(__name__)

POLLING_PLATFORMS = ("linux", "darwin", "freebsd")
RUNLOOP_SLICE_SECONDS = 0.5


class PathMonitor:
    """Base class for path monitors."""

    thread_name = "pathwatcher-monitor"

    def __init__(self, settings=None, reader=None):
        self.settings = settings or dict(config.DEFAULT_CONFIG["settings"])
        self._reader = reader or read_current_path
        self._handler = None
        self._thread = None
        self._stop = threading.Event()

    def is_supported(self):
        raise NotImplementedError

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self, handler):
        """
        Start monitoring on a dedicated thread.

        Args:
            handler: Called with a NetworkPath for the initial state and
                     after every change, always on the monitor thread
        """
        if self.is_running:
            raise RuntimeError(f"{self.__class__.__name__} is already running")

        self._handler = handler
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.thread_name, daemon=True)
        self._thread.start()
        logger.info(f"{self.__class__.__name__} started")

    def cancel(self):
        """Stop monitoring. No handler call starts after this returns."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        logger.info(f"{self.__class__.__name__} cancelled")

    def read_path(self):
        return self._reader(self.settings)

    def _emit(self, path):
        if self._stop.is_set() or self._handler is None:
            return
        try:
            self._handler(path)
        except Exception:
            logger.exception("Path update handler failed")

    def _run(self):
        raise NotImplementedError


class PollingPathMonitor(PathMonitor):
    """Re-read the path on an interval and report when it changes."""

    def __init__(self, settings=None, reader=None, interval=None):
        super().__init__(settings=settings, reader=reader)
        if interval is None:
            interval = self.settings.get(
                "poll_interval_seconds", config.DEFAULT_POLL_INTERVAL_SECONDS
            )
        self.interval = float(interval)
        self._last_path = None

    def is_supported(self):
        return sys.platform.startswith(POLLING_PLATFORMS)

    def poll_once(self):
        """
        Read the path and emit it if it differs from the last one emitted.

        Returns:
            bool: True if a path was emitted
        """
        path = self.read_path()
        if path == self._last_path:
            return False
        if self._last_path is not None:
            logger.info("Network change detected")
        self._last_path = path
        self._emit(path)
        return True

    def _run(self):
        self._last_path = None
        while not self._stop.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Failed to read network path")
            self._stop.wait(self.interval)


class SystemConfigurationPathMonitor(PathMonitor):
    """Report a path reading on every SCDynamicStore network notification."""

    store_name = "com.user.pathwatcher"

    def __init__(self, settings=None, reader=None):
        super().__init__(settings=settings, reader=reader)
        self._store = None

    def is_supported(self):
        return sys.platform == "darwin" and SCDynamicStoreCreate is not None

    def sc_callback(self, store, changed_keys, info):
        """SystemConfiguration callback for network changes."""
        logger.debug(f"Network change detected: {list(changed_keys or [])}")
        self._read_and_emit()

    def _read_and_emit(self):
        try:
            path = self.read_path()
        except Exception:
            logger.exception("Failed to read network path")
            return
        self._emit(path)

    def _run(self):
        self._store = SCDynamicStoreCreate(None, self.store_name, self.sc_callback, None)
        if not self._store:
            logger.error("Failed to create SCDynamicStore")
            return

        SCDynamicStoreSetNotificationKeys(
            self._store, config.SC_NOTIFICATION_KEYS, config.SC_NOTIFICATION_PATTERNS
        )
        source = SCDynamicStoreCreateRunLoopSource(None, self._store, 0)
        CFRunLoopAddSource(CFRunLoopGetCurrent(), source, kCFRunLoopDefaultMode)
        logger.debug("SystemConfiguration watcher is set up")

        self._read_and_emit()

        # Run in slices so cancel() is noticed without a cross-thread stop
        while not self._stop.is_set():
            CFRunLoopRunInMode(kCFRunLoopDefaultMode, RUNLOOP_SLICE_SECONDS, False)

        self._store = None


def create_path_monitor(settings=None):
    """
    Build the monitor selected by the ``monitor`` setting.

    ``auto`` prefers SystemConfiguration notifications and falls back to
    polling when they are unavailable.
    """
    settings = settings or dict(config.DEFAULT_CONFIG["settings"])
    choice = settings.get("monitor", config.DEFAULT_MONITOR)

    if choice in (config.MONITOR_AUTO, config.MONITOR_SYSTEMCONFIGURATION):
        monitor = SystemConfigurationPathMonitor(settings=settings)
        if monitor.is_supported() or choice == config.MONITOR_SYSTEMCONFIGURATION:
            return monitor
        logger.debug("SystemConfiguration unavailable, using polling monitor")

    return PollingPathMonitor(settings=settings)
