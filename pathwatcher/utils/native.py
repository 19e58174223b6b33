"""
Native macOS API utilities for PathWatcher.

This module is the single place that talks to the SystemConfiguration and
CoreWLAN frameworks (through pyobjc). On other platforms the frameworks are
absent and every function here returns None, leaving the caller to use its
own Linux query.
"""

try:
    import SystemConfiguration
except ImportError:
    SystemConfiguration = None

try:
    import CoreWLAN
except ImportError:
    CoreWLAN = None

from ..logging_config import get_logger

logger = get_logger(__name__)

STORE_NAME = "PathWatcher"


def _create_store():
    store = SystemConfiguration.SCDynamicStoreCreate(None, STORE_NAME, None, None)
    if not store:
        logger.debug("Failed to create SCDynamicStore")
        return None
    return store


def get_primary_interfaces_native():
    """
    Get the interfaces that carry the IPv4 and IPv6 default routes.

    Returns:
        list: Interface names (IPv4 first, duplicates removed), or None if
              SystemConfiguration is unavailable or the lookup failed.
    """
    if not SystemConfiguration:
        return None

    try:
        store = _create_store()
        if store is None:
            return None

        names = []
        for key in ("State:/Network/Global/IPv4", "State:/Network/Global/IPv6"):
            value = SystemConfiguration.SCDynamicStoreCopyValue(store, key)
            if not value:
                continue
            primary = value.get("PrimaryInterface")
            if primary and str(primary) not in names:
                names.append(str(primary))

        logger.debug(f"Native API found primary interfaces: {names}")
        return names

    except Exception as e:
        logger.debug(f"Native primary interface lookup failed: {e}")
        return None


def get_dns_servers_native():
    """Get the global DNS server addresses, or None if unavailable."""
    if not SystemConfiguration:
        return None

    try:
        store = _create_store()
        if store is None:
            return None
        value = SystemConfiguration.SCDynamicStoreCopyValue(store, "State:/Network/Global/DNS")
        if not value:
            return []
        return [str(server) for server in value.get("ServerAddresses", [])]
    except Exception as e:
        logger.debug(f"Native DNS lookup failed: {e}")
        return None


def get_wifi_interface_names_native():
    """Get the BSD names of the Wi-Fi interfaces known to CoreWLAN."""
    if not CoreWLAN:
        return None

    try:
        client = CoreWLAN.CWWiFiClient.sharedWiFiClient()
        names = client.interfaceNames() or []
        return {str(name) for name in names}
    except Exception as e:
        logger.debug(f"Could not list Wi-Fi interfaces using CoreWLAN: {e}")
        return None
