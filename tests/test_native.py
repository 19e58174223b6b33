"""
Unit tests for pathwatcher/utils/native.py

The pyobjc frameworks are replaced with mocks, so these run on any platform.
"""

import pytest
from unittest.mock import MagicMock, patch

STORE_VALUES = {
    "State:/Network/Global/IPv4": {"PrimaryInterface": "en0"},
    "State:/Network/Global/IPv6": {"PrimaryInterface": "en0"},
    "State:/Network/Global/DNS": {"ServerAddresses": ["192.168.1.1", "2001:db8::1"]},
}


@pytest.fixture
def mock_sc():
    sc = MagicMock()
    sc.SCDynamicStoreCreate.return_value = object()
    sc.SCDynamicStoreCopyValue.side_effect = lambda store, key: STORE_VALUES.get(key)
    with patch("pathwatcher.utils.native.SystemConfiguration", sc):
        yield sc


@pytest.mark.unit
class TestPrimaryInterfaces:
    """Tests for get_primary_interfaces_native."""

    def test_primary_interfaces(self, mock_sc):
        from pathwatcher.utils.native import get_primary_interfaces_native

        assert get_primary_interfaces_native() == ["en0"]

    def test_no_default_route(self, mock_sc):
        from pathwatcher.utils.native import get_primary_interfaces_native

        mock_sc.SCDynamicStoreCopyValue.side_effect = None
        mock_sc.SCDynamicStoreCopyValue.return_value = None

        assert get_primary_interfaces_native() == []

    def test_store_creation_failure_is_unknown(self, mock_sc):
        from pathwatcher.utils.native import get_primary_interfaces_native

        mock_sc.SCDynamicStoreCreate.return_value = None

        assert get_primary_interfaces_native() is None
        mock_sc.SCDynamicStoreCopyValue.assert_not_called()

    def test_framework_missing(self):
        from pathwatcher.utils.native import get_primary_interfaces_native

        with patch("pathwatcher.utils.native.SystemConfiguration", None):
            assert get_primary_interfaces_native() is None


@pytest.mark.unit
class TestDnsServersNative:
    """Tests for get_dns_servers_native."""

    def test_servers(self, mock_sc):
        from pathwatcher.utils.native import get_dns_servers_native

        assert get_dns_servers_native() == ["192.168.1.1", "2001:db8::1"]

    def test_store_creation_failure(self, mock_sc):
        from pathwatcher.utils.native import get_dns_servers_native

        mock_sc.SCDynamicStoreCreate.return_value = None

        assert get_dns_servers_native() is None
