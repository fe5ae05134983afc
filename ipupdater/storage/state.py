"""
Observed state persistence for IP Updater.

state.json holds the last address that was successfully emailed. It is only
rewritten after a successful notification, and always replaced atomically.
"""

import json
from pathlib import Path

from .. import config
from ..errors import StorageError
from ..logging_config import get_logger
from ..models import ObservedState
from ..utils import atomic_write_json, read_json

logger = get_logger(__name__)


class StateStore:
    def __init__(self, path=None):
        self.path = Path(path) if path else config.get_state_path()

    def read(self):
        """
        Return the stored ObservedState, or None.

        None covers both "never written" (first run) and unreadable or corrupt
        content; the next successful notification overwrites a bad file.
        """
        try:
            data = read_json(self.path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return None

        if data is None:
            logger.debug("No previous state (first run)")
            return None

        try:
            return ObservedState.from_dict(data)
        except ValueError as e:
            logger.warning(f"Ignoring corrupt state file {self.path}: {e}")
            return None

    def write(self, state):
        """Atomically replace the state file. Raises StorageError on failure."""
        try:
            atomic_write_json(self.path, state.to_dict())
        except OSError as e:
            raise StorageError(f"Could not write state to {self.path}: {e}") from e
        logger.debug(f"State committed: {state.address}")
