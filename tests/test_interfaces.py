"""
Unit tests for pathwatcher/network/interfaces.py

Tests interface classification, the flags check and enumeration, with
psutil mocked out.
"""

import socket
from types import SimpleNamespace

import pytest
from unittest.mock import patch

from pathwatcher.models import InterfaceType


def _stats(isup=True, flags="up,broadcast,running,multicast", mtu=1500):
    return SimpleNamespace(isup=isup, duplex=0, speed=0, mtu=mtu, flags=flags)


def _addr(family, address):
    return SimpleNamespace(family=family, address=address, netmask=None, broadcast=None, ptp=None)


MOCK_STATS = {
    "lo": _stats(flags="up,loopback,running", mtu=65536),
    "wlp2s0": _stats(),
    "enp3s0": _stats(isup=False, flags="broadcast,multicast"),
    "wwan0": _stats(),
    "docker0": _stats(),
}

MOCK_ADDRS = {
    "lo": [_addr(socket.AF_INET, "127.0.0.1")],
    "wlp2s0": [
        _addr(socket.AF_INET, "192.168.1.20"),
        _addr(socket.AF_INET6, "fe80::1%wlp2s0"),
    ],
    "enp3s0": [_addr(socket.AF_INET, "10.0.0.5")],
    "wwan0": [_addr(socket.AF_INET6, "2001:db8::20")],
    "docker0": [],
}


@pytest.fixture
def mock_psutil():
    with (
        patch("pathwatcher.network.interfaces.psutil.net_if_stats", return_value=MOCK_STATS),
        patch("pathwatcher.network.interfaces.psutil.net_if_addrs", return_value=MOCK_ADDRS),
        patch("pathwatcher.network.interfaces.get_wifi_interface_names_native", return_value=None),
        patch("pathwatcher.network.interfaces._is_wireless_linux", return_value=False),
        patch("pathwatcher.network.interfaces._interface_index", return_value=None),
    ):
        yield


@pytest.mark.unit
class TestClassifyInterfaceType:
    """Tests for classify_interface_type."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("lo", InterfaceType.LOOPBACK),
            ("lo0", InterfaceType.LOOPBACK),
            ("pdp_ip0", InterfaceType.CELLULAR),
            ("wwan0", InterfaceType.CELLULAR),
            ("wlp2s0", InterfaceType.WIFI),
            ("wlan0", InterfaceType.WIFI),
            ("eth0", InterfaceType.WIRED),
            ("enp3s0", InterfaceType.WIRED),
            ("en5", InterfaceType.WIRED),
            ("utun3", InterfaceType.OTHER),
            ("docker0", InterfaceType.OTHER),
        ],
    )
    def test_names(self, name, expected):
        from pathwatcher.network.interfaces import classify_interface_type

        with patch("pathwatcher.network.interfaces._is_wireless_linux", return_value=False):
            assert classify_interface_type(name) == expected

    def test_corewlan_names_mark_wifi(self):
        """On macOS en0 is Wi-Fi only when CoreWLAN says so."""
        from pathwatcher.network.interfaces import classify_interface_type

        assert classify_interface_type("en0", wifi_names={"en0"}) == InterfaceType.WIFI
        assert classify_interface_type("en1", wifi_names={"en0"}) == InterfaceType.WIRED

    def test_loopback_flag_wins(self):
        from pathwatcher.network.interfaces import classify_interface_type

        stats = _stats(flags="up,loopback")

        assert classify_interface_type("eth9", stats=stats) == InterfaceType.LOOPBACK

    def test_sysfs_wireless(self):
        from pathwatcher.network import interfaces

        with (
            patch.object(interfaces.sys, "platform", "linux"),
            patch("pathwatcher.network.interfaces._is_wireless_linux", return_value=True),
        ):
            assert interfaces.classify_interface_type("eth1") == InterfaceType.WIFI


@pytest.mark.unit
class TestInterfaceIsActiveAndNotLoopback:
    """Tests for the flags check."""

    def test_up_interface(self, mock_psutil):
        from pathwatcher.network.interfaces import interface_is_active_and_not_loopback

        assert interface_is_active_and_not_loopback("wlp2s0")

    def test_loopback(self, mock_psutil):
        from pathwatcher.network.interfaces import interface_is_active_and_not_loopback

        assert not interface_is_active_and_not_loopback("lo")

    def test_down_interface(self, mock_psutil):
        from pathwatcher.network.interfaces import interface_is_active_and_not_loopback

        assert not interface_is_active_and_not_loopback("enp3s0")

    def test_unknown_interface(self, mock_psutil):
        from pathwatcher.network.interfaces import interface_is_active_and_not_loopback

        assert not interface_is_active_and_not_loopback("nope0")

    def test_psutil_failure(self):
        from pathwatcher.network.interfaces import interface_is_active_and_not_loopback

        with patch(
            "pathwatcher.network.interfaces.psutil.net_if_stats",
            side_effect=OSError("denied"),
        ):
            assert not interface_is_active_and_not_loopback("wlp2s0")


@pytest.mark.unit
class TestListAvailableInterfaces:
    """Tests for list_available_interfaces."""

    def test_up_interfaces_with_addresses_in_os_order(self, mock_psutil):
        from pathwatcher.network.interfaces import list_available_interfaces

        available = list_available_interfaces()

        assert [(i.name, i.type) for i in available] == [
            ("lo", InterfaceType.LOOPBACK),
            ("wlp2s0", InterfaceType.WIFI),
            ("wwan0", InterfaceType.CELLULAR),
        ]

    def test_enumeration_failure_gives_empty_list(self):
        from pathwatcher.network.interfaces import list_available_interfaces

        with patch(
            "pathwatcher.network.interfaces.psutil.net_if_stats",
            side_effect=OSError("denied"),
        ):
            assert list_available_interfaces() == []


@pytest.mark.unit
class TestAddresses:
    """Tests for the address helpers."""

    def test_ipv4_addresses(self, mock_psutil):
        from pathwatcher.network.interfaces import get_interface_addresses

        assert get_interface_addresses("wlp2s0", socket.AF_INET) == ["192.168.1.20"]

    def test_scope_id_stripped(self, mock_psutil):
        from pathwatcher.network.interfaces import get_interface_addresses

        assert get_interface_addresses("wlp2s0", socket.AF_INET6) == ["fe80::1"]

    def test_link_local_is_not_routable(self, mock_psutil):
        from pathwatcher.network.interfaces import has_routable_ipv6

        assert not has_routable_ipv6("wlp2s0")
        assert has_routable_ipv6("wwan0")


@pytest.mark.unit
class TestDescribeInterfaces:
    """Tests for describe_interfaces."""

    def test_describes_every_interface(self, mock_psutil):
        from pathwatcher.network.interfaces import describe_interfaces

        described = {entry["name"]: entry for entry in describe_interfaces()}

        assert set(described) == set(MOCK_STATS)
        assert described["enp3s0"]["isup"] is False
        assert "loopback" in described["lo"]["flags"]
        assert ("inet", "192.168.1.20") in described["wlp2s0"]["addresses"]
        assert described["docker0"]["addresses"] == []
