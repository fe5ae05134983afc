"""
Pytest configuration and shared fixtures for IP Updater tests.

This module provides reusable fixtures and configuration for all tests.
"""

import json

import pytest
from unittest.mock import MagicMock


@pytest.fixture
def v1_config():
    """Provide a legacy single-recipient configuration."""
    return {
        "version": 1,
        "enabled": True,
        "email": "me@example.com",
        "metadata": {"label": "Office Mac", "notes": "Desk 4"},
        "keychain": {"service": "com.user.ipupdater", "account": "resend"},
    }


@pytest.fixture
def v2_config():
    """Provide a current multi-recipient configuration."""
    return {
        "version": 2,
        "enabled": True,
        "emails": ["me@example.com", "ops@example.com"],
        "metadata": {"label": "Office Mac"},
        "keychain": {"service": "com.user.ipupdater", "account": "resend"},
    }


@pytest.fixture
def data_dir(tmp_path):
    """Provide a temporary data directory."""
    path = tmp_path / "IPUpdater"
    path.mkdir()
    return path


@pytest.fixture
def write_config(data_dir):
    """Write a config dict (or raw text) to data_dir/config.json."""

    def _write(content):
        path = data_dir / "config.json"
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return path

    return _write


@pytest.fixture
def notification_config():
    """Provide a validated two-recipient NotificationConfig."""
    from ipupdater.models import DisplayMetadata, NotificationConfig, SecretReference

    return NotificationConfig(
        version=2,
        enabled=True,
        recipients=("me@example.com", "ops@example.com"),
        secret=SecretReference(service="com.user.ipupdater", account="resend"),
        metadata=DisplayMetadata(label="Office Mac", notes="Desk <4>"),
    )


@pytest.fixture
def mock_notifier():
    """Provide a notifier that succeeds by default."""
    notifier = MagicMock()
    notifier.send.return_value = None
    return notifier


@pytest.fixture
def mock_detector():
    """Provide a network detector returning 192.168.1.100."""
    detector = MagicMock()
    detector.detect_private_ipv4.return_value = "192.168.1.100"
    return detector


@pytest.fixture(autouse=True)
def isolate_user_files(tmp_path, monkeypatch):
    """Keep logs, settings and data out of the real home directory."""
    from ipupdater import config

    log_dir = tmp_path / "Logs"
    monkeypatch.setattr(config, "LOG_DIR", log_dir)
    monkeypatch.setattr(config, "LOG_FILE", log_dir / "ipupdater.log")
    monkeypatch.setattr(config, "get_settings_path", lambda: tmp_path / "settings.toml")
    monkeypatch.setenv(config.DATA_DIR_ENV_VAR, str(tmp_path / "default-data"))


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    from ipupdater.logging_config import IPUpdaterLogger

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
    IPUpdaterLogger._initialized = False
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    IPUpdaterLogger._initialized = False
