"""
Configuration management for IP Updater.

This module holds application constants, file locations and the optional
agent runtime settings stored in TOML. The notification configuration itself
(recipients, keychain reference) lives in JSON and is read by
``ipupdater.config_loader``.
"""

import logging
import os
from pathlib import Path

import toml

# --- App Constants ---
APP_NAME = "ipupdater"
LAUNCH_AGENT_LABEL = f"com.user.{APP_NAME}"
DATA_DIR_ENV_VAR = "IPUPDATER_DATA_DIR"
DEFAULT_DATA_DIR = Path.home() / "Library" / "Application Support" / "IPUpdater"
CONFIG_FILENAME = "config.json"
STATE_FILENAME = "state.json"
HISTORY_FILENAME = "history.json"
LOG_DIR = Path.home() / "Library" / "Logs"
LOG_FILE = LOG_DIR / "ipupdater.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Network Constants ---
DEFAULT_INTERFACE = "en0"  # Wi-Fi on most Macs
DEFAULT_DEBUG = False

# --- Persistence Constants ---
HISTORY_LIMIT = 100  # Most recent entries kept in history.json
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"  # ISO-8601, always UTC

# --- Notification Constants ---
SUPPORTED_CONFIG_VERSIONS = (1, 2)
SEND_TIMEOUT = 10  # seconds, per recipient request
RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_SENDER = "IP Updater <noreply@resend.dev>"
USER_AGENT = "IPUpdater/1.0"

# Default runtime settings for the agent
DEFAULT_SETTINGS = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "interface": DEFAULT_INTERFACE,
        "send_timeout": SEND_TIMEOUT,
        "sender": DEFAULT_SENDER,
    },
}


def get_data_dir():
    """Gets the directory holding config.json, state.json and history.json."""
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_DIR


def get_config_path(data_dir=None):
    """Gets the path to the JSON notification configuration."""
    return Path(data_dir or get_data_dir()) / CONFIG_FILENAME


def get_state_path(data_dir=None):
    """Gets the path to the observed state file."""
    return Path(data_dir or get_data_dir()) / STATE_FILENAME


def get_history_path(data_dir=None):
    """Gets the path to the history log."""
    return Path(data_dir or get_data_dir()) / HISTORY_FILENAME


def get_settings_path():
    """Gets the path to the agent runtime settings file."""
    return Path.home() / ".config" / APP_NAME / "settings.toml"


def _matches_default_type(value, default):
    """True if a settings value has the same kind as its default."""
    # bool is an int subclass, so it is checked first in both directions
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(default, bool) and isinstance(value, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float)) and value > 0
    return isinstance(value, type(default))


def load_settings(path=None):
    """
    Loads agent runtime settings from TOML, merged over the defaults.

    A missing file yields the defaults. An unreadable or malformed file is
    logged and also yields the defaults. A value whose type does not match its
    default is logged and the default kept; runtime settings never stop a run.
    """
    path = Path(path) if path else get_settings_path()
    merged = {"settings": dict(DEFAULT_SETTINGS["settings"])}

    # stdlib logger here: logging_config imports this module
    logger = logging.getLogger(__name__)

    if not path.exists():
        return merged

    try:
        with open(path, "r") as f:
            loaded = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return merged

    settings = loaded.get("settings", {})
    if not isinstance(settings, dict):
        logger.warning(f"Ignoring malformed [settings] table in {path}")
        return merged

    for key, value in settings.items():
        if key not in merged["settings"]:
            continue
        if not _matches_default_type(value, merged["settings"][key]):
            logger.warning(
                f"Ignoring setting {key}={value!r} in {path}: "
                f"expected {type(merged['settings'][key]).__name__}"
            )
            continue
        merged["settings"][key] = value

    logger.debug(f"Loaded settings: {merged['settings']}")
    return merged


if __name__ == "__main__":
    settings = load_settings()
    import json

    print(json.dumps(settings, indent=4))
