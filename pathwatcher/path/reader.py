"""
Read the current network path from the platform queries.

A path reading combines the interface list, the default routes and the
resolver configuration into one NetworkPath, the same fields the OS path
monitor would report.
"""

import socket

from ..logging_config import get_logger
from ..models import InterfaceType, NetworkPath, PathStatus
from ..network import (
    classify_interface_type,
    get_default_route_interfaces,
    get_dns_servers,
    get_interface_addresses,
    has_routable_ipv6,
    list_available_interfaces,
)

logger = get_logger(__name__)


def _derive_status(default_interfaces, available_names):
    if default_interfaces is None:
        return PathStatus.UNKNOWN
    if any(name in available_names for name in default_interfaces):
        return PathStatus.SATISFIED
    if default_interfaces:
        # A route exists but its interface has no address yet
        return PathStatus.REQUIRES_CONNECTION
    return PathStatus.UNSATISFIED


def read_current_path(settings=None):
    """
    Take one reading of the network path.

    Args:
        settings: Settings dict (see config.get_settings); only the
                  expensive_interfaces and constrained_interfaces keys are read

    Returns:
        NetworkPath: The current path. Failed queries show up as UNKNOWN
                     status or False flags, never as exceptions.
    """
    settings = settings or {}
    expensive_names = set(settings.get("expensive_interfaces", []))
    constrained_names = set(settings.get("constrained_interfaces", []))

    available = list_available_interfaces()
    by_name = {interface.name: interface for interface in available}

    default_interfaces = get_default_route_interfaces()
    status = _derive_status(default_interfaces, by_name)

    routed = [name for name in (default_interfaces or []) if name in by_name]
    used_types = frozenset(by_name[name].type for name in routed)
    if not used_types and default_interfaces:
        used_types = frozenset(classify_interface_type(name) for name in default_interfaces)

    satisfied = status == PathStatus.SATISFIED
    supports_ipv4 = satisfied and any(get_interface_addresses(name, socket.AF_INET) for name in routed)
    supports_ipv6 = satisfied and any(has_routable_ipv6(name) for name in routed)
    supports_dns = satisfied and bool(get_dns_servers())

    path = NetworkPath(
        status=status,
        is_expensive=InterfaceType.CELLULAR in used_types
        or any(name in expensive_names for name in routed),
        is_constrained=any(name in constrained_names for name in routed),
        supports_dns=supports_dns,
        supports_ipv4=supports_ipv4,
        supports_ipv6=supports_ipv6,
        available_interfaces=tuple(available),
        used_interface_types=used_types,
        default_route_interfaces=tuple(default_interfaces or ()),
    )
    logger.debug(
        f"Path reading: status={status.value}, default={list(path.default_route_interfaces)}, "
        f"uses={sorted(t.value for t in used_types)}"
    )
    return path
