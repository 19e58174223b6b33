"""
Default route and DNS resolver queries for PathWatcher.

The default route decides which interface types the path "uses"; the
resolver configuration decides whether the path supports DNS. Native
SystemConfiguration values are preferred, falling back to the routing table
(``ip route`` on Linux, ``netstat -rn`` elsewhere) and ``/etc/resolv.conf``.
"""

import re
from typing import List, NamedTuple, Optional

from .. import config
from ..logging_config import get_logger
from ..utils import get_dns_servers_native, get_primary_interfaces_native, run_command

logger = get_logger(__name__)


class DefaultRoute(NamedTuple):
    """One default route entry from the routing table."""

    gateway: Optional[str]
    interface: str


def parse_ip_route_output(output):
    """
    Parse ``ip route show default`` output.

    Example line:
        default via 192.168.1.1 dev wlp2s0 proto dhcp metric 600
    """
    routes = []
    for line in (output or "").splitlines():
        line = line.strip()
        if not line.startswith("default"):
            continue
        dev_match = re.search(r"\bdev\s+(\S+)", line)
        if not dev_match:
            continue
        via_match = re.search(r"\bvia\s+(\S+)", line)
        routes.append(
            DefaultRoute(
                gateway=via_match.group(1) if via_match else None,
                interface=dev_match.group(1),
            )
        )
    return routes


def parse_netstat_output(output):
    """
    Parse ``netstat -rn`` output for default routes.

    Handles the BSD layout (``default  192.168.1.5  UGSc  en8``) and the
    Linux layout (``0.0.0.0  192.168.1.1  0.0.0.0  UG  0 0 0  eth0``).
    """
    routes = []
    for line in (output or "").splitlines():
        parts = line.split()
        if len(parts) < 4:
            continue
        if parts[0] in ("default", "0/0"):
            flags, interface = parts[2], parts[3]
        elif parts[0] == "0.0.0.0" and parts[2] == "0.0.0.0" and len(parts) >= 8:
            flags, interface = parts[3], parts[-1]
        else:
            continue
        if "G" not in flags:
            continue
        routes.append(DefaultRoute(gateway=parts[1], interface=interface))
    return routes


def get_default_routes():
    """
    Get default routes from the routing table.

    Returns:
        list: DefaultRoute entries (IPv4 before IPv6), or None if no routing
              table query could be run at all
    """
    ipv4 = run_command(["ip", "-4", "route", "show", "default"], capture=True, quiet_on_error=True)
    if ipv4 is not None:
        ipv6 = run_command(["ip", "-6", "route", "show", "default"], capture=True, quiet_on_error=True)
        return parse_ip_route_output(ipv4) + parse_ip_route_output(ipv6)

    logger.debug("Falling back to netstat for default route")
    netstat_output = run_command(["netstat", "-rn"], capture=True, quiet_on_error=True)
    if netstat_output is None:
        return None
    return parse_netstat_output(netstat_output)


def get_default_route_interfaces() -> Optional[List[str]]:
    """
    Get the interfaces carrying default routes.

    Returns:
        list: Interface names without duplicates, empty when there is no
              default route, or None when the routing state is unknown
    """
    native = get_primary_interfaces_native()
    if native is not None:
        return native

    routes = get_default_routes()
    if routes is None:
        return None

    interfaces = list(dict.fromkeys(route.interface for route in routes))
    logger.debug(f"Default route interfaces: {interfaces}")
    return interfaces


def get_default_gateway():
    """
    Get the first default route, i.e. the gateway ``netstat`` lists as
    ``default`` and the interface it is reached through.

    Returns:
        DefaultRoute or None
    """
    routes = get_default_routes()
    if routes:
        return routes[0]

    native = get_primary_interfaces_native()
    if native:
        return DefaultRoute(gateway=None, interface=native[0])
    return None


def parse_resolv_conf(content):
    """Extract nameserver addresses from resolv.conf content."""
    servers = []
    for match in re.finditer(r"^\s*nameserver\s+(\S+)", content or "", re.MULTILINE):
        servers.append(match.group(1))
    return servers


def get_dns_servers():
    """Get the configured DNS server addresses."""
    native = get_dns_servers_native()
    if native is not None:
        return native

    try:
        content = config.RESOLV_CONF_PATH.read_text()
    except OSError as e:
        logger.debug(f"Could not read {config.RESOLV_CONF_PATH}: {e}")
        return []

    servers = parse_resolv_conf(content)
    logger.debug(f"DNS servers from resolv.conf: {servers}")
    return servers
