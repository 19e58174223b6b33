"""
PathWatcher - Network path monitoring.

Reports the current network path (active interface, IPv4/IPv6/DNS support,
expensive and constrained flags) and delivers a fresh snapshot to
subscribers on every network change.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from . import config, logging_config
from .models import (
    InterfaceDescriptor,
    InterfaceType,
    NetworkPath,
    PathSnapshot,
    PathStatus,
    SupportResult,
)
from .path import PathObserver, SubscriptionHandle
from .state import ObserverState, PathStateStore, ViewPhase

__all__ = [
    "config",
    "logging_config",
    "InterfaceDescriptor",
    "InterfaceType",
    "NetworkPath",
    "PathSnapshot",
    "PathStatus",
    "SupportResult",
    "PathObserver",
    "SubscriptionHandle",
    "ObserverState",
    "PathStateStore",
    "ViewPhase",
]
