"""
Configuration management for PathWatcher.

This module handles loading, validation, and default configuration values
for the PathWatcher application.
"""

import sys

import toml
from pathlib import Path

# --- App Constants ---
APP_NAME = "pathwatcher"
if sys.platform == "darwin":
    LOG_DIR = Path.home() / "Library" / "Logs"
else:
    LOG_DIR = Path.home() / ".local" / "state" / APP_NAME
LOG_FILE = LOG_DIR / "pathwatcher.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# Console lines share the terminal with command output
CONSOLE_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# --- Monitor Constants ---
MONITOR_AUTO = "auto"
MONITOR_SYSTEMCONFIGURATION = "systemconfiguration"
MONITOR_POLLING = "polling"
MONITOR_CHOICES = (MONITOR_AUTO, MONITOR_SYSTEMCONFIGURATION, MONITOR_POLLING)

DEFAULT_MONITOR = MONITOR_AUTO
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_SELECTION_POLICY = "last"
DEFAULT_DEBUG = False

# --- Platform Query Constants ---
COMMAND_TIMEOUT = 5  # seconds
RESOLV_CONF_PATH = Path("/etc/resolv.conf")
SYS_CLASS_NET = Path("/sys/class/net")

# Keys watched in the SystemConfiguration dynamic store
SC_NOTIFICATION_KEYS = [
    "State:/Network/Global/IPv4",
    "State:/Network/Global/IPv6",
    "State:/Network/Global/DNS",
]
SC_NOTIFICATION_PATTERNS = [
    "State:/Network/Interface/.*/Link",
    "State:/Network/Interface/.*/IPv4",
    "State:/Network/Interface/.*/IPv6",
]

# Default configuration for the application
DEFAULT_CONFIG = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "monitor": DEFAULT_MONITOR,
        "poll_interval_seconds": DEFAULT_POLL_INTERVAL_SECONDS,
        "selection_policy": DEFAULT_SELECTION_POLICY,
        # Interfaces whose traffic is metered (e.g. a phone hotspot)
        "expensive_interfaces": [],
        # Interfaces running in a low-data mode
        "constrained_interfaces": [],
    },
}


def get_config_path():
    """Gets the path to the configuration file."""
    return Path.home() / ".config" / APP_NAME / "config.toml"


def load_config():
    """Loads the configuration from the TOML file."""
    path = get_config_path()
    if not path.exists():
        # Create a default config if one doesn't exist
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)
        return DEFAULT_CONFIG

    with open(path, "r") as f:
        config = toml.load(f)

    from .logging_config import get_logger

    logger = get_logger(__name__)
    logger.debug(f"Loaded settings: {sorted(config.get('settings', {}).keys())}")
    return config


def get_settings(config=None):
    """
    Return the [settings] table with defaults filled in for missing keys.

    Args:
        config: A loaded configuration dict. Loaded from disk when omitted.

    Returns:
        dict: Complete settings dictionary
    """
    if config is None:
        config = load_config()

    settings = dict(DEFAULT_CONFIG["settings"])
    settings.update(config.get("settings", {}))

    if settings["monitor"] not in MONITOR_CHOICES:
        from .logging_config import get_logger

        get_logger(__name__).warning(
            f"Unknown monitor '{settings['monitor']}', using '{DEFAULT_MONITOR}'"
        )
        settings["monitor"] = DEFAULT_MONITOR

    try:
        settings["poll_interval_seconds"] = max(0.1, float(settings["poll_interval_seconds"]))
    except (TypeError, ValueError):
        settings["poll_interval_seconds"] = DEFAULT_POLL_INTERVAL_SECONDS

    for key in ("expensive_interfaces", "constrained_interfaces"):
        names = settings[key]
        if isinstance(names, str):
            names = [names]
        settings[key] = [str(name) for name in names or []]

    return settings

