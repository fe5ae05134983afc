"""
Email notification through the Resend API for IP Updater.

Sending is all-or-nothing: one request per recipient, in order, and the first
failure (HTTP error, transport error or timeout) fails the whole notification.
The next trigger will retry every recipient.
"""

import html
import json
import socket
import urllib.error
import urllib.request
from datetime import datetime, timezone

from .. import config
from ..errors import SendError
from ..logging_config import get_logger
from .keychain import KeychainSecretStore

# Get module logger
logger = get_logger(__name__)


def build_subject(address):
    return f"IP Address Update: {address}"


def build_html(notification_config, address, sent_at=None):
    """Render the email body for a detected address."""
    sent_at = sent_at or datetime.now(timezone.utc).strftime(config.TIMESTAMP_FORMAT)
    metadata = notification_config.metadata

    parts = [
        "<html>",
        "<body>",
        "<h2>IP Address Update</h2>",
        f"<p><strong>IP Address:</strong> {html.escape(address)}</p>",
    ]
    if metadata.label:
        parts.append(f"<p><strong>Label:</strong> {html.escape(metadata.label)}</p>")
    if metadata.notes:
        parts.append(f"<p><strong>Notes:</strong> {html.escape(metadata.notes)}</p>")
    parts.extend(
        [
            f"<p><small>Sent at {sent_at}</small></p>",
            "</body>",
            "</html>",
        ]
    )
    return "\n".join(parts)


class EmailNotifier:
    """Sends the address-change email to every configured recipient."""

    def __init__(
        self,
        secret_store=None,
        api_url=config.RESEND_API_URL,
        sender=config.DEFAULT_SENDER,
        timeout=config.SEND_TIMEOUT,
    ):
        self.secret_store = secret_store or KeychainSecretStore()
        self.api_url = api_url
        self.sender = sender
        self.timeout = timeout

    def send(self, notification_config, address):
        """
        Deliver the notification to all recipients.

        Raises:
            SecretLookupError: the API key could not be read
            SendError: any recipient could not be reached
        """
        api_key = self.secret_store.get_secret(notification_config.secret)

        subject = build_subject(address)
        body = build_html(notification_config, address)

        for recipient in notification_config.recipients:
            self._send_one(api_key, recipient, subject, body)

        logger.info(
            f"Notification for {address} sent to {len(notification_config.recipients)} recipient(s)"
        )

    def _send_one(self, api_key, recipient, subject, body):
        payload = {
            "from": self.sender,
            "to": [recipient],
            "subject": subject,
            "html": body,
        }
        request = urllib.request.Request(
            self.api_url,
            data=json.dumps(payload).encode("utf-8"),
            method="POST",
        )
        request.add_header("Authorization", f"Bearer {api_key}")
        request.add_header("Content-Type", "application/json")
        request.add_header("User-Agent", config.USER_AGENT)

        logger.debug(f"Sending notification to {recipient}")
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
        except urllib.error.HTTPError as e:
            raise SendError(
                f"Email API rejected message to {recipient}: HTTP {e.code}",
                recipient=recipient,
                status=e.code,
            ) from e
        except (urllib.error.URLError, socket.timeout, TimeoutError, OSError) as e:
            raise SendError(
                f"Could not reach email API for {recipient}: {e}", recipient=recipient
            ) from e

        if not 200 <= status < 300:
            raise SendError(
                f"Email API returned HTTP {status} for {recipient}",
                recipient=recipient,
                status=status,
            )
        logger.debug(f"Email API accepted message to {recipient} (HTTP {status})")
