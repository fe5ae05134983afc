"""
IP Updater - email notifications when a Mac's private IP address changes.

A launchd-triggered agent that detects the current Wi-Fi address, compares it
with the last address it successfully reported, and emails the configured
recipients when it differs.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Make key components available at package level
from . import config, agent, logging_config

__all__ = ["config", "agent", "logging_config"]
