"""
Network module for PathWatcher.

This module handles the platform queries behind a path reading:
- Interface enumeration, classification and flags
- Default route and gateway lookup
- DNS resolver configuration
"""

from .interfaces import (
    classify_interface_type,
    describe_interfaces,
    get_interface_addresses,
    has_routable_ipv6,
    interface_is_active_and_not_loopback,
    list_available_interfaces,
)
from .routes import (
    DefaultRoute,
    get_default_gateway,
    get_default_route_interfaces,
    get_default_routes,
    get_dns_servers,
)

__all__ = [
    "classify_interface_type",
    "describe_interfaces",
    "get_interface_addresses",
    "has_routable_ipv6",
    "interface_is_active_and_not_loopback",
    "list_available_interfaces",
    "DefaultRoute",
    "get_default_gateway",
    "get_default_route_interfaces",
    "get_default_routes",
    "get_dns_servers",
]
