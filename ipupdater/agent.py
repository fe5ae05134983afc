"""
The IP Updater agent: one decision per trigger.

launchd starts the agent on network changes, wake and login. Each run:

    1. loads the configuration (disabled -> stop, invalid -> raise)
    2. detects the private address (failure -> stop)
    3. reads the last notified state
    4. stops if the address is unchanged
    5. emails the recipients (failure -> record history, stop)
    6. commits the new state
    7. records history

State is written only after a successful email, so a failed send is retried
by the next trigger. Nothing here loops, sleeps or retries.
"""

import sys
from datetime import datetime, timezone

from . import config
from .config_loader import ConfigLoader
from .errors import (
    ConfigDisabled,
    ConfigError,
    NetworkError,
    NotificationError,
    StorageError,
)
from .external import EmailNotifier
from .logging_config import get_logger, setup_logging
from .models import HistoryEntry, ObservedState, Outcome, Reason, RunResult
from .network import NetworkDetector
from .storage import HistoryLog, StateStore

# Get module logger
logger = get_logger(__name__)


def utc_timestamp():
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).strftime(config.TIMESTAMP_FORMAT)


def classify_change(previous, address):
    """
    Compare the stored state with the detected address.

    Returns the Reason to notify with, or None if nothing changed.
    """
    if previous is None:
        return Reason.FIRST_RUN
    if previous.address != address:
        return Reason.ADDRESS_CHANGE
    return None


class Agent:
    """Runs one pass over injected collaborators."""

    def __init__(
        self,
        config_loader,
        network_detector,
        state_store,
        notifier,
        history_log,
        clock=utc_timestamp,
    ):
        self.config_loader = config_loader
        self.network_detector = network_detector
        self.state_store = state_store
        self.notifier = notifier
        self.history_log = history_log
        self.clock = clock

    def run(self):
        """
        Execute one decision pass.

        Returns:
            RunResult describing how the run ended.

        Raises:
            ConfigError: the configuration is missing or invalid. This is the
            only failure that leaves this method.
        """
        try:
            notification_config = self.config_loader.read()
        except ConfigDisabled:
            logger.info("Agent disabled in config, exiting")
            return RunResult(Outcome.DISABLED)

        try:
            address = self.network_detector.detect_private_ipv4()
        except NetworkError as e:
            logger.info(f"No private address available, exiting: {e}")
            return RunResult(Outcome.NETWORK_UNAVAILABLE, error=e)
        except Exception as e:
            logger.warning(f"Address detection failed unexpectedly, exiting: {e}")
            return RunResult(Outcome.NETWORK_UNAVAILABLE, error=e)

        previous = self.state_store.read()
        reason = classify_change(previous, address)
        if reason is None:
            logger.debug(f"Address unchanged ({address}), nothing to do")
            return RunResult(Outcome.UNCHANGED, address=address)

        logger.info(
            f"Change detected ({reason.value}): "
            f"{previous.address if previous else 'none'} -> {address}"
        )

        try:
            self.notifier.send(notification_config, address)
        except Exception as e:
            if isinstance(e, NotificationError):
                logger.warning(f"Notification failed, state left unchanged: {e}")
            else:
                logger.error(f"Notification failed unexpectedly, state left unchanged: {e}")
            self._record_history(address, sent=False, reason=reason)
            return RunResult(Outcome.NOTIFICATION_FAILED, address=address, reason=reason, error=e)

        try:
            self.state_store.write(ObservedState(address=address, observed_at=self.clock()))
        except StorageError as e:
            logger.error(f"Notification sent but state could not be saved: {e}")
            return RunResult(Outcome.STATE_COMMIT_FAILED, address=address, reason=reason, error=e)

        self._record_history(address, sent=True, reason=reason)
        return RunResult(Outcome.NOTIFIED, address=address, reason=reason)

    def _record_history(self, address, sent, reason):
        """Append a history entry. Failures are logged and never change the run."""
        entry = HistoryEntry(
            timestamp=self.clock(),
            address=address,
            notification_sent=sent,
            reason=reason,
        )
        try:
            self.history_log.append(entry)
        except Exception as e:
            logger.warning(f"Could not record history: {e}")


def build_agent(data_dir=None, settings=None):
    """Wire the production collaborators for the given data directory."""
    settings = (settings or config.load_settings())["settings"]
    return Agent(
        config_loader=ConfigLoader(config.get_config_path(data_dir)),
        network_detector=NetworkDetector(interface=settings["interface"]),
        state_store=StateStore(config.get_state_path(data_dir)),
        notifier=EmailNotifier(
            sender=settings["sender"],
            timeout=settings["send_timeout"],
        ),
        history_log=HistoryLog(config.get_history_path(data_dir)),
    )


def main(debug=False, data_dir=None):
    """
    Entry point for launchd. Exit code 0 unless the configuration is invalid.
    """
    settings = config.load_settings()
    setup_logging(debug=debug or settings["settings"]["debug"])

    agent = build_agent(data_dir=data_dir, settings=settings)
    try:
        result = agent.run()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.debug(f"Run finished: {result.outcome.value}")
    sys.exit(0)


if __name__ == "__main__":
    main()
