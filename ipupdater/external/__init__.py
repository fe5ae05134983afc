"""
External services module for IP Updater.

This module handles interactions with services outside the process:
- Keychain lookup of the email API key
- Email delivery through the Resend API
"""

from .keychain import KeychainSecretStore
from .resend import EmailNotifier, build_html, build_subject

__all__ = [
    "KeychainSecretStore",
    "EmailNotifier",
    "build_html",
    "build_subject",
]
