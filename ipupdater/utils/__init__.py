"""
Utility functions for IP Updater.

This module provides common utility functions used throughout the application.
"""

from .commands import run_command
from .files import atomic_write_json, read_json
from .native import (
    get_interface_ipv4_addresses_native,
    is_interface_active_native,
)

__all__ = [
    "run_command",
    "atomic_write_json",
    "read_json",
    "get_interface_ipv4_addresses_native",
    "is_interface_active_native",
]
