"""
Loading and validation of the JSON notification configuration.

Both schema generations decode into the same NotificationConfig:

    v1: {"version": 1, "email": "a@example.com", ...}
    v2: {"version": 2, "emails": ["a@example.com", "b@example.com"], ...}

When a file carries both fields, a non-empty "emails" list wins.
"""

import json
from pathlib import Path

from . import config
from .errors import (
    ConfigDisabled,
    ConfigFormatError,
    ConfigMissingError,
    InvalidSecretReferenceError,
    MissingRecipientsError,
    UnsupportedVersionError,
)
from .logging_config import get_logger
from .models import DisplayMetadata, NotificationConfig, SecretReference

logger = get_logger(__name__)


def _parse_recipients(raw):
    """Normalize v1 'email' / v2 'emails' into one recipient tuple."""
    emails = raw.get("emails")
    if emails is not None:
        if not isinstance(emails, list) or not all(isinstance(e, str) for e in emails):
            raise ConfigFormatError("'emails' must be a list of strings")
        emails = [e.strip() for e in emails if e.strip()]
        if emails:
            return tuple(emails)

    email = raw.get("email")
    if email is not None:
        if not isinstance(email, str):
            raise ConfigFormatError("'email' must be a string")
        if email.strip():
            return (email.strip(),)

    raise MissingRecipientsError("Config names no recipient in 'emails' or 'email'")


def _parse_secret(raw):
    keychain = raw.get("keychain")
    if not isinstance(keychain, dict):
        raise InvalidSecretReferenceError("'keychain' must be an object")

    service = keychain.get("service")
    account = keychain.get("account")
    if not isinstance(service, str) or not isinstance(account, str):
        raise InvalidSecretReferenceError("'keychain.service' and 'keychain.account' must be strings")
    if not service or not account:
        raise InvalidSecretReferenceError("'keychain.service' and 'keychain.account' must not be empty")
    return SecretReference(service=service, account=account)


def _parse_metadata(raw):
    metadata = raw.get("metadata")
    if metadata is None:
        return DisplayMetadata()
    if not isinstance(metadata, dict):
        raise ConfigFormatError("'metadata' must be an object")

    label = metadata.get("label")
    notes = metadata.get("notes")
    for name, value in (("label", label), ("notes", notes)):
        if value is not None and not isinstance(value, str):
            raise ConfigFormatError(f"'metadata.{name}' must be a string")
    return DisplayMetadata(label=label or None, notes=notes or None)


def parse_config(raw):
    """
    Validate a decoded config object and normalize it.

    Checks run in this order: version, enabled, recipients, keychain, metadata.
    A disabled config therefore only needs a supported version to be
    recognized as disabled.

    Raises:
        ConfigDisabled: the config is valid but 'enabled' is false
        ConfigError: any structural problem
    """
    if not isinstance(raw, dict):
        raise ConfigFormatError("Config must be a JSON object")

    version = raw.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        raise ConfigFormatError("'version' must be an integer")
    if version not in config.SUPPORTED_CONFIG_VERSIONS:
        raise UnsupportedVersionError(version)

    enabled = raw.get("enabled")
    if not isinstance(enabled, bool):
        raise ConfigFormatError("'enabled' must be a boolean")
    if not enabled:
        raise ConfigDisabled("Agent is disabled in config")

    return NotificationConfig(
        version=version,
        enabled=enabled,
        recipients=_parse_recipients(raw),
        secret=_parse_secret(raw),
        metadata=_parse_metadata(raw),
    )


class ConfigLoader:
    """Reads config.json from disk on every call; nothing is cached."""

    def __init__(self, path=None):
        self.path = Path(path) if path else config.get_config_path()

    def read(self):
        """
        Load and validate the configuration.

        Returns:
            NotificationConfig

        Raises:
            ConfigDisabled: the config is turned off
            ConfigMissingError: the file does not exist
            ConfigFormatError: unreadable file or invalid JSON/field types
            UnsupportedVersionError, MissingRecipientsError,
            InvalidSecretReferenceError: validation failures
        """
        if not self.path.exists():
            raise ConfigMissingError(f"Config not found at {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFormatError(f"Config at {self.path} is not valid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFormatError(f"Could not read config at {self.path}: {e}") from e

        loaded = parse_config(raw)
        logger.debug(
            f"Loaded config v{loaded.version} with {len(loaded.recipients)} recipient(s)"
        )
        return loaded
