"""
File helpers for IP Updater.

State and history are replaced wholesale: data goes to a temporary file in the
same directory, is flushed to disk, then renamed over the target. Readers see
either the old file or the new one, never a partial write.
"""

import json
import os
import tempfile
from pathlib import Path

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)


def atomic_write_json(path, data, indent=2):
    """
    Serialize data as JSON and atomically replace path with it.

    Creates the parent directory if needed. Raises OSError (or TypeError for
    unserializable data) and leaves any existing file untouched on failure.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(data, indent=indent, sort_keys=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise

    logger.debug(f"Wrote {path}")


def read_json(path):
    """
    Read and decode a JSON file.

    Returns None if the file does not exist. Raises OSError, UnicodeDecodeError
    or json.JSONDecodeError for unreadable or corrupt content; callers decide
    whether that is fatal.
    """
    path = Path(path)
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
