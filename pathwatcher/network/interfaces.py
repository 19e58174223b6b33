"""
Network interface queries for PathWatcher.

This module enumerates interfaces, classifies them by link type and answers
the "is this interface up and not a loopback device" question used when
picking the active interface.
"""

import socket
import sys

import psutil

from .. import config
from ..logging_config import get_logger
from ..models import InterfaceDescriptor, InterfaceType
from ..utils import get_wifi_interface_names_native

logger = get_logger(__name__)

# Name prefixes, checked in order. Linux predictable names (wlp2s0, enp3s0,
# wwan0) and the BSD names macOS/iOS use (en0, pdp_ip0, lo0).
LOOPBACK_PREFIXES = ("lo",)
CELLULAR_PREFIXES = ("pdp_ip", "wwan", "ww", "rmnet", "ccmni")
WIFI_PREFIXES = ("wl", "ath")
WIRED_PREFIXES = ("eth", "en", "em")

IPV6_LINK_LOCAL_PREFIX = "fe80"


def _flag_set(stats):
    """Split psutil's comma separated flag string into a set."""
    flags = getattr(stats, "flags", "") or ""
    return {flag.strip() for flag in flags.split(",") if flag.strip()}


def _is_wireless_linux(name):
    return (config.SYS_CLASS_NET / name / "wireless").exists()


def classify_interface_type(name, wifi_names=None, stats=None):
    """
    Classify an interface by name and platform hints.

    Args:
        name: Interface name (e.g., 'en0', 'wlp2s0')
        wifi_names: Optional set of names known to be Wi-Fi (CoreWLAN on macOS)
        stats: Optional psutil stats entry, used for the loopback flag

    Returns:
        InterfaceType: The best-guess link type
    """
    if stats is not None and "loopback" in _flag_set(stats):
        return InterfaceType.LOOPBACK
    if name.startswith(LOOPBACK_PREFIXES):
        return InterfaceType.LOOPBACK

    if wifi_names and name in wifi_names:
        return InterfaceType.WIFI
    if sys.platform.startswith("linux") and _is_wireless_linux(name):
        return InterfaceType.WIFI

    if name.startswith(CELLULAR_PREFIXES):
        return InterfaceType.CELLULAR
    if name.startswith(WIFI_PREFIXES):
        return InterfaceType.WIFI
    if name.startswith(WIRED_PREFIXES):
        # On macOS every en* is Ethernet-class; Wi-Fi was caught above.
        return InterfaceType.WIRED

    return InterfaceType.OTHER


def _interface_index(name):
    try:
        return socket.if_nametoindex(name)
    except OSError:
        return None


def interface_is_active_and_not_loopback(name):
    """
    Check the interface flags: administratively up and not loopback.

    Args:
        name: Interface name

    Returns:
        bool: True if the interface is up and is not a loopback device
    """
    try:
        stats = psutil.net_if_stats().get(name)
    except Exception as e:
        logger.debug(f"Could not read flags for interface {name}: {e}")
        return False

    if stats is None:
        logger.debug(f"Interface {name} not found")
        return False

    flags = _flag_set(stats)
    if "loopback" in flags:
        return False
    if flags and "up" not in flags:
        return False
    return bool(stats.isup)


def list_available_interfaces():
    """
    List the interfaces that are up and carry at least one IP address.

    Returns:
        list: InterfaceDescriptor entries in the order the OS reports them
    """
    try:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
    except Exception as e:
        logger.debug(f"Failed to enumerate interfaces: {e}")
        return []

    wifi_names = get_wifi_interface_names_native()

    available = []
    for name, entries in addrs.items():
        nic = stats.get(name)
        if nic is None or not nic.isup:
            continue
        if not any(entry.family in (socket.AF_INET, socket.AF_INET6) for entry in entries):
            continue

        available.append(
            InterfaceDescriptor(
                name=name,
                type=classify_interface_type(name, wifi_names=wifi_names, stats=nic),
                index=_interface_index(name),
            )
        )

    logger.debug(f"Available interfaces: {[str(i) for i in available]}")
    return available


def get_interface_addresses(name, family):
    """Return the addresses of one family configured on an interface."""
    try:
        entries = psutil.net_if_addrs().get(name, [])
    except Exception as e:
        logger.debug(f"Failed to get addresses for interface {name}: {e}")
        return []
    return [entry.address.split("%")[0] for entry in entries if entry.family == family]


def has_routable_ipv6(name):
    """Whether the interface carries an IPv6 address beyond link-local."""
    return any(
        not address.lower().startswith(IPV6_LINK_LOCAL_PREFIX)
        for address in get_interface_addresses(name, socket.AF_INET6)
    )


def describe_interfaces():
    """
    Describe every interface the OS knows about, up or not.

    Returns:
        list: One dict per interface with name, type, index, flags, mtu and
              addresses (list of (family, address) tuples)
    """
    try:
        stats = psutil.net_if_stats()
        addrs = psutil.net_if_addrs()
    except Exception as e:
        logger.error(f"Failed to enumerate interfaces: {e}")
        return []

    wifi_names = get_wifi_interface_names_native()
    families = {socket.AF_INET: "inet", socket.AF_INET6: "inet6", psutil.AF_LINK: "link"}

    described = []
    for name in list(dict.fromkeys(list(addrs) + list(stats))):
        nic = stats.get(name)
        addresses = [
            (families.get(entry.family, str(entry.family)), entry.address)
            for entry in addrs.get(name, [])
        ]
        described.append(
            {
                "name": name,
                "type": classify_interface_type(name, wifi_names=wifi_names, stats=nic),
                "index": _interface_index(name),
                "isup": bool(nic.isup) if nic else False,
                "flags": sorted(_flag_set(nic)) if nic else [],
                "mtu": nic.mtu if nic else None,
                "addresses": addresses,
            }
        )
    return described
