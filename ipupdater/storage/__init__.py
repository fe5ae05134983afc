"""
Persistence module for IP Updater.

This module owns the two files the agent writes:
- state.json: last successfully notified address
- history.json: bounded log of run outcomes
"""

from .state import StateStore
from .history import HistoryLog

__all__ = [
    "StateStore",
    "HistoryLog",
]
