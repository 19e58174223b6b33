"""
Pytest configuration and shared fixtures for PathWatcher tests.

This module provides a simulated path monitor and helpers to build path
readings without touching the real network stack.
"""

import pytest

from pathwatcher.models import (
    InterfaceDescriptor,
    InterfaceType,
    NetworkPath,
    PathStatus,
)
from pathwatcher.path.monitor import PathMonitor


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no real network access")


class SimulatedPathMonitor(PathMonitor):
    """
    A path monitor driven by the test.

    ``emit`` plays the role of the OS delivering a path-change notification;
    it runs the handler synchronously on the calling thread, which stands in
    for the monitor thread.
    """

    def __init__(self, supported=True):
        super().__init__(reader=lambda settings: None)
        self.supported = supported
        self.start_calls = 0
        self.cancel_calls = 0

    def is_supported(self):
        return self.supported

    def start(self, handler):
        self._handler = handler
        self._stop.clear()
        self.start_calls += 1

    def cancel(self):
        self._stop.set()
        self.cancel_calls += 1

    def emit(self, path):
        self._emit(path)


def make_path(interfaces=(("en0", "wifi"),), uses=("wifi",), status=PathStatus.SATISFIED, **kwargs):
    """Build a NetworkPath from (name, type) pairs and used type names."""
    kwargs.setdefault("supports_dns", True)
    kwargs.setdefault("supports_ipv4", True)
    return NetworkPath(
        status=status,
        available_interfaces=tuple(
            InterfaceDescriptor(name=name, type=InterfaceType(kind)) for name, kind in interfaces
        ),
        used_interface_types=frozenset(InterfaceType(kind) for kind in uses),
        **kwargs,
    )


@pytest.fixture
def simulated_monitor():
    """Provide a supported simulated path monitor."""
    return SimulatedPathMonitor()


@pytest.fixture
def unsupported_monitor():
    """Provide a simulated path monitor on an unsupported platform."""
    return SimulatedPathMonitor(supported=False)


@pytest.fixture
def path_factory():
    """Provide the make_path helper."""
    return make_path


@pytest.fixture
def all_interfaces_active():
    """Flags query that reports every interface as up and not loopback."""
    return lambda name: True


@pytest.fixture
def mock_settings():
    """Provide a settings dictionary."""
    return {
        "debug": False,
        "monitor": "polling",
        "poll_interval_seconds": 0.05,
        "selection_policy": "last",
        "expensive_interfaces": [],
        "constrained_interfaces": [],
    }


@pytest.fixture
def mock_config(mock_settings):
    """Provide a mock configuration dictionary."""
    return {"settings": dict(mock_settings)}


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide a temporary config directory."""
    config_dir = tmp_path / ".config" / "pathwatcher"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
