"""
PathObserver: turns path monitor readings into snapshots for subscribers.

For every reading the monitor reports, the observer selects the active
interface, builds one immutable PathSnapshot and queues its delivery on the
serial dispatcher. Subscribers therefore never run on the monitor thread and
never run concurrently with each other.

Example usage:
    observer = PathObserver()
    if observer.start(print) is SupportResult.UNSUPPORTED:
        ...
    observer.stop()
"""

import itertools
import threading

from .. import config
from ..logging_config import get_logger
from ..models import PathSnapshot, SupportResult
from ..network import interface_is_active_and_not_loopback
from .dispatch import SerialDispatcher
from .monitor import create_path_monitor
from .selection import get_selection_policy, select_active_interface

logger = get_logger(__name__)

_handle_ids = itertools.count(1)


class SubscriptionHandle:
    """Returned by PathObserver.subscribe; pass it back to unsubscribe."""

    def __init__(self, observer, handler, support):
        self.id = next(_handle_ids)
        self.handler = handler
        self.support = support
        self.delivered = 0
        self._observer = observer
        self._active = support is SupportResult.SUPPORTED

    @property
    def active(self):
        return self._active

    def cancel(self):
        self._observer.unsubscribe(self)

    def __repr__(self):
        return f"SubscriptionHandle(id={self.id}, support={self.support.value}, active={self._active})"


class PathObserver:
    """Subscribe to network path changes."""

    def __init__(
        self,
        monitor=None,
        dispatcher=None,
        settings=None,
        is_active_and_not_loopback=None,
        policy=None,
    ):
        """
        Args:
            monitor: PathMonitor to use, built from settings when omitted
            dispatcher: Execution context for callbacks; the observer creates
                        and owns a SerialDispatcher when omitted
            settings: Settings dict (see config.get_settings)
            is_active_and_not_loopback: Interface flags query
            policy: Candidate selection policy, from settings when omitted
        """
        self.settings = settings or dict(config.DEFAULT_CONFIG["settings"])
        self.monitor = monitor or create_path_monitor(self.settings)
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher or SerialDispatcher()
        self._is_active_and_not_loopback = (
            is_active_and_not_loopback or interface_is_active_and_not_loopback
        )
        self._policy = policy or get_selection_policy(
            self.settings.get("selection_policy", config.DEFAULT_SELECTION_POLICY)
        )

        self._subscriptions = []
        self._lock = threading.Lock()
        # Held for the duration of each delivery so unsubscribe can wait it out
        self._delivery_lock = threading.RLock()
        self._support = None
        self._running = False
        self._stopped = False
        self.event_count = 0

    def check_support(self):
        """Ask the monitor once whether this platform can be observed."""
        if self._support is None:
            supported = self.monitor.is_supported()
            self._support = SupportResult.SUPPORTED if supported else SupportResult.UNSUPPORTED
            logger.debug(f"Path monitoring {self._support.value} ({self.monitor.__class__.__name__})")
        return self._support

    def start(self, callback):
        """
        Start delivering snapshots to ``callback``.

        Returns:
            SupportResult: UNSUPPORTED if the platform cannot be monitored,
                           in which case callback is never invoked
        """
        return self.subscribe(callback).support

    def subscribe(self, handler):
        """
        Register a handler and start the monitor if it is not running yet.

        Returns:
            SubscriptionHandle: Check ``handle.support`` before relying on it

        Raises:
            RuntimeError: If the observer has been stopped
        """
        if self._stopped:
            raise RuntimeError("PathObserver has been stopped; create a new one")

        support = self.check_support()
        handle = SubscriptionHandle(self, handler, support)
        if support is SupportResult.UNSUPPORTED:
            logger.warning("Network path monitoring is not supported on this platform")
            return handle

        with self._lock:
            if self._stopped:
                raise RuntimeError("PathObserver has been stopped; create a new one")
            self._subscriptions.append(handle)
            start_monitor = not self._running
            self._running = True

        if start_monitor:
            self.monitor.start(self._on_path_update)

        logger.debug(f"Subscribed {handle}")
        return handle

    def unsubscribe(self, handle):
        """
        Remove a subscription. The handler is not called after this returns;
        a delivery already in progress on another thread is waited for.
        """
        with self._delivery_lock:
            with self._lock:
                handle._active = False
                if handle in self._subscriptions:
                    self._subscriptions.remove(handle)
        logger.debug(f"Unsubscribed {handle}")

    def stop(self):
        """Cancel the monitor and drop every subscription."""
        with self._lock:
            self._stopped = True
            was_running = self._running
            self._running = False
            handles = list(self._subscriptions)
            self._subscriptions.clear()

        if was_running:
            self.monitor.cancel()

        with self._delivery_lock:
            for handle in handles:
                handle._active = False

        if self._owns_dispatcher:
            self.dispatcher.shutdown(wait=True)

        logger.info(f"Path observer stopped after {self.event_count} update(s)")

    def _on_path_update(self, path):
        """Runs on the monitor thread for every path reading."""
        active = select_active_interface(path, self._is_active_and_not_loopback, self._policy)
        snapshot = PathSnapshot.from_path(path, active)
        self.event_count += 1

        logger.info(
            f"Path update #{self.event_count}: status={snapshot.status.value}, "
            f"active interface={active if active else 'none'}"
        )
        logger.debug(f"Default route interfaces: {list(path.default_route_interfaces)}")

        self.dispatcher.submit(self._deliver, snapshot)

    def _deliver(self, snapshot):
        """Runs on the dispatcher for every snapshot."""
        with self._delivery_lock:
            with self._lock:
                handles = list(self._subscriptions)

            for handle in handles:
                # An earlier handler may have unsubscribed this one
                if not handle.active:
                    continue
                try:
                    handle.handler(snapshot)
                    handle.delivered += 1
                except Exception:
                    logger.exception(f"Snapshot handler {handle} failed")
