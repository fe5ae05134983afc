"""
Exception types for IP Updater.

Only ConfigError subclasses escape the agent; every other failure is caught
inside the run and reported through its outcome.
"""


class IPUpdaterError(Exception):
    """Base class for all IP Updater errors."""


# --- Configuration ---


class ConfigError(IPUpdaterError):
    """The notification configuration is missing or structurally invalid."""


class ConfigMissingError(ConfigError):
    """No configuration file exists."""


class ConfigFormatError(ConfigError):
    """The configuration file is unreadable, not JSON, or has wrong field types."""


class UnsupportedVersionError(ConfigError):
    """The configuration declares a schema version this agent cannot read."""

    def __init__(self, version):
        super().__init__(f"Unsupported config version: {version!r}")
        self.version = version


class MissingRecipientsError(ConfigError):
    """Neither 'emails' nor the legacy 'email' field names a recipient."""


class InvalidSecretReferenceError(ConfigError):
    """The keychain reference lacks a service or account."""


class ConfigDisabled(IPUpdaterError):
    """The configuration is valid but turned off. Not a ConfigError."""


# --- Network ---


class NetworkError(IPUpdaterError):
    """The current private address could not be determined."""


class NoPrivateAddressError(NetworkError):
    """The interface has no RFC1918 IPv4 address."""


# --- Notification ---


class NotificationError(IPUpdaterError):
    """The notification was not delivered to every recipient."""


class SecretLookupError(NotificationError):
    """The API key could not be read from the keychain."""


class SendError(NotificationError):
    """A request to the email API failed, timed out or was rejected."""

    def __init__(self, message, recipient=None, status=None):
        super().__init__(message)
        self.recipient = recipient
        self.status = status


# --- Persistence ---


class StorageError(IPUpdaterError):
    """A state or history file could not be written."""
