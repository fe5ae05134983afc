"""
Data types shared by the agent, its collaborators and the CLI.

JSON files use camelCase keys; the dataclasses use snake_case attributes and
convert at the to_dict()/from_dict() boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class DisplayMetadata:
    """Optional free-text details included in the email body."""

    label: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class SecretReference:
    """Keychain lookup handle for the email API key."""

    service: str
    account: str


@dataclass(frozen=True)
class NotificationConfig:
    """Validated configuration, normalized from either schema version."""

    version: int
    enabled: bool
    recipients: Tuple[str, ...]
    secret: SecretReference
    metadata: DisplayMetadata = field(default_factory=DisplayMetadata)


class Reason(str, Enum):
    """Why a history entry was recorded."""

    FIRST_RUN = "first_run"
    ADDRESS_CHANGE = "address_change"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value):
        """Map a stored value to a Reason; unrecognized values become UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ObservedState:
    """The last address that was successfully communicated."""

    address: str
    observed_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "observedAt": self.observed_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObservedState":
        """Raises ValueError when required fields are missing or mistyped."""
        if not isinstance(data, dict):
            raise ValueError("state must be a JSON object")
        address = data.get("address")
        observed_at = data.get("observedAt")
        if not isinstance(address, str) or not address:
            raise ValueError("state 'address' must be a non-empty string")
        if not isinstance(observed_at, str):
            raise ValueError("state 'observedAt' must be a string")
        return cls(address=address, observed_at=observed_at)


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded decision: when, which address, and whether the email went out."""

    timestamp: str
    address: str
    notification_sent: bool
    reason: Reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "address": self.address,
            "notificationSent": self.notification_sent,
            "reason": self.reason.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        """Raises ValueError when required fields are missing or mistyped."""
        if not isinstance(data, dict):
            raise ValueError("history entry must be a JSON object")
        timestamp = data.get("timestamp")
        address = data.get("address")
        sent = data.get("notificationSent")
        if not isinstance(timestamp, str) or not isinstance(address, str):
            raise ValueError("history entry needs string 'timestamp' and 'address'")
        if not isinstance(sent, bool):
            raise ValueError("history entry 'notificationSent' must be a boolean")
        return cls(
            timestamp=timestamp,
            address=address,
            notification_sent=sent,
            reason=Reason.parse(data.get("reason")),
        )


class Outcome(str, Enum):
    """How a single agent run ended."""

    DISABLED = "disabled"
    NETWORK_UNAVAILABLE = "network_unavailable"
    UNCHANGED = "unchanged"
    NOTIFICATION_FAILED = "notification_failed"
    STATE_COMMIT_FAILED = "state_commit_failed"
    NOTIFIED = "notified"


@dataclass(frozen=True)
class RunResult:
    """What a run did. Returned by Agent.run() for logging and tests."""

    outcome: Outcome
    address: Optional[str] = None
    reason: Optional[Reason] = None
    error: Optional[Exception] = None
