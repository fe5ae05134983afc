"""
Private address detection for IP Updater.

The detector looks at a single interface (en0 by default) and returns its
RFC1918 IPv4 address or raises. It never guesses from other interfaces.
"""

from .. import config
from ..errors import NetworkError, NoPrivateAddressError
from ..logging_config import get_logger
from ..utils import (
    run_command,
    get_interface_ipv4_addresses_native,
    is_interface_active_native,
)
from .addresses import first_private_ipv4

# Get module logger
logger = get_logger(__name__)


def get_interface_ipv4_addresses(interface):
    """
    Get candidate IPv4 addresses for an interface.

    Tries the SystemConfiguration dynamic store first, then falls back to
    `ipconfig getifaddr`, which prints nothing and fails for inactive
    interfaces.
    """
    addresses = get_interface_ipv4_addresses_native(interface)
    if addresses:
        return addresses

    logger.debug(f"Using ipconfig fallback for {interface}")
    output = run_command(["ipconfig", "getifaddr", interface], capture=True, quiet_on_error=True)
    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


class NetworkDetector:
    """Detects the private IPv4 address of one interface."""

    def __init__(self, interface=config.DEFAULT_INTERFACE):
        self.interface = interface

    def detect_private_ipv4(self):
        """
        Return the interface's RFC1918 address.

        Raises:
            NetworkError: the interface link is down
            NoPrivateAddressError: no qualifying address on the interface
        """
        if is_interface_active_native(self.interface) is False:
            raise NetworkError(f"Interface {self.interface} is not active")

        candidates = get_interface_ipv4_addresses(self.interface)
        address = first_private_ipv4(candidates)
        if not address:
            raise NoPrivateAddressError(
                f"No private IPv4 address on {self.interface} (candidates: {candidates})"
            )

        logger.debug(f"Detected private address {address} on {self.interface}")
        return address
