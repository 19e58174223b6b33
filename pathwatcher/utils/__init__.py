"""
Utility functions for PathWatcher.

This module provides command execution and the native framework bindings
used by the network queries.
"""

from .commands import run_command
from .native import (
    get_primary_interfaces_native,
    get_dns_servers_native,
    get_wifi_interface_names_native,
)

__all__ = [
    "run_command",
    "get_primary_interfaces_native",
    "get_dns_servers_native",
    "get_wifi_interface_names_native",
]
