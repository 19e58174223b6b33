"""
Value types shared across PathWatcher.

Everything here is immutable: a path reading or a snapshot is produced once
per notification and handed off by value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class PathStatus(str, Enum):
    """Overall reachability of the network path."""

    SATISFIED = "satisfied"
    UNSATISFIED = "unsatisfied"
    REQUIRES_CONNECTION = "requires_connection"
    UNKNOWN = "unknown"


class InterfaceType(str, Enum):
    """Interface classification types."""

    WIFI = "wifi"
    CELLULAR = "cellular"
    WIRED = "wired"
    LOOPBACK = "loopback"
    OTHER = "other"


class SupportResult(str, Enum):
    """Whether path monitoring is available on this platform."""

    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class InterfaceDescriptor:
    """A network interface as reported by the OS."""

    name: str
    type: InterfaceType
    index: Optional[int] = None

    def __str__(self):
        return f"{self.name} ({self.type.value})"


@dataclass(frozen=True)
class NetworkPath:
    """
    One reading of the OS network path.

    This is what a path monitor emits on every change; the observer turns it
    into a PathSnapshot by adding the active interface.
    """

    status: PathStatus
    is_expensive: bool = False
    is_constrained: bool = False
    supports_dns: bool = False
    supports_ipv4: bool = False
    supports_ipv6: bool = False
    available_interfaces: Tuple[InterfaceDescriptor, ...] = ()
    used_interface_types: FrozenSet[InterfaceType] = field(default_factory=frozenset)
    default_route_interfaces: Tuple[str, ...] = ()

    def uses_interface_type(self, interface_type: InterfaceType) -> bool:
        """Whether traffic on this path currently goes over the given type."""
        return interface_type in self.used_interface_types


@dataclass(frozen=True)
class PathSnapshot:
    """Normalized path state delivered to subscribers."""

    status: PathStatus
    is_expensive: bool
    is_constrained: bool
    supports_dns: bool
    supports_ipv4: bool
    supports_ipv6: bool
    active_interface: Optional[InterfaceDescriptor]
    interfaces: Tuple[InterfaceDescriptor, ...]

    @classmethod
    def from_path(cls, path: NetworkPath, active_interface: Optional[InterfaceDescriptor]):
        return cls(
            status=path.status,
            is_expensive=path.is_expensive,
            is_constrained=path.is_constrained,
            supports_dns=path.supports_dns,
            supports_ipv4=path.supports_ipv4,
            supports_ipv6=path.supports_ipv6,
            active_interface=active_interface,
            interfaces=tuple(path.available_interfaces),
        )

    @property
    def active_interface_type(self) -> Optional[InterfaceType]:
        return self.active_interface.type if self.active_interface else None
