"""
Network module for IP Updater.

This module handles detection of the current private IPv4 address.
"""

from .addresses import is_private_ipv4, first_private_ipv4
from .detection import NetworkDetector, get_interface_ipv4_addresses

__all__ = [
    "is_private_ipv4",
    "first_private_ipv4",
    "NetworkDetector",
    "get_interface_ipv4_addresses",
]
