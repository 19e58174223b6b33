"""
Network path observation for PathWatcher.

- reader: one reading of the OS network path
- monitor: platform facilities that report path changes
- selection: active interface selection policies
- dispatch: the serial execution context callbacks run on
- observer: PathObserver, the subscription interface
"""

from .dispatch import SerialDispatcher
from .monitor import (
    PathMonitor,
    PollingPathMonitor,
    SystemConfigurationPathMonitor,
    create_path_monitor,
)
from .observer import PathObserver, SubscriptionHandle
from .reader import read_current_path
from .selection import (
    find_candidates,
    first_match,
    get_selection_policy,
    last_match,
    select_active_interface,
)

__all__ = [
    "SerialDispatcher",
    "PathMonitor",
    "PollingPathMonitor",
    "SystemConfigurationPathMonitor",
    "create_path_monitor",
    "PathObserver",
    "SubscriptionHandle",
    "read_current_path",
    "find_candidates",
    "first_match",
    "get_selection_policy",
    "last_match",
    "select_active_interface",
]
