"""
Bounded history log for IP Updater.

history.json records what each deciding run did, for observability only.
Nothing in the agent reads it back to make decisions.
"""

import json
from pathlib import Path

from .. import config
from ..errors import StorageError
from ..logging_config import get_logger
from ..models import HistoryEntry
from ..utils import atomic_write_json, read_json

logger = get_logger(__name__)


class HistoryLog:
    """Append-only log keeping the most recent `limit` entries, oldest first."""

    def __init__(self, path=None, limit=config.HISTORY_LIMIT):
        self.path = Path(path) if path else config.get_history_path()
        self.limit = limit

    def read(self):
        """
        Return the stored entries, oldest first.

        A missing, unreadable or corrupt log reads as empty.
        """
        try:
            data = read_json(self.path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable history file {self.path}: {e}")
            return []

        if data is None:
            return []

        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.warning(f"Ignoring corrupt history file {self.path}: no entries list")
            return []

        try:
            return [HistoryEntry.from_dict(item) for item in entries]
        except ValueError as e:
            logger.warning(f"Ignoring corrupt history file {self.path}: {e}")
            return []

    def append(self, entry):
        """
        Append one entry, drop the oldest beyond the limit, and rewrite the log.

        Raises StorageError if the file cannot be written.
        """
        entries = self.read()
        entries.append(entry)
        entries = entries[-self.limit:]

        try:
            atomic_write_json(self.path, {"entries": [e.to_dict() for e in entries]})
        except OSError as e:
            raise StorageError(f"Could not write history to {self.path}: {e}") from e
        logger.debug(f"History now holds {len(entries)} entries")
