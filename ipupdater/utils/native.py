"""
Native macOS API utilities for IP Updater.

SystemConfiguration (PyObjC) is only present on macOS. Callers fall back to
command-line tools when it is missing or returns nothing.
"""

try:
    import SystemConfiguration
except ImportError:
    SystemConfiguration = None

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)

STORE_NAME = "IPUpdater"


def get_interface_ipv4_addresses_native(interface):
    """
    Read the IPv4 addresses configured on an interface from the dynamic store.

    Args:
        interface: BSD interface name (e.g. 'en0')

    Returns:
        list: Addresses in dotted decimal, or None if the framework is
        unavailable or the interface has no IPv4 state.
    """
    if not SystemConfiguration:
        return None

    try:
        store = SystemConfiguration.SCDynamicStoreCreate(None, STORE_NAME, None, None)
        if not store:
            return None

        ipv4_key = f"State:/Network/Interface/{interface}/IPv4"
        ipv4_dict = SystemConfiguration.SCDynamicStoreCopyValue(store, ipv4_key)
        if not ipv4_dict:
            logger.debug(f"No IPv4 state for interface {interface}")
            return None

        addresses = [str(addr) for addr in ipv4_dict.get("Addresses", []) or []]
        logger.debug(f"Native API found addresses for {interface}: {addresses}")
        return addresses

    except Exception as e:
        logger.debug(f"Native IPv4 lookup for {interface} failed: {e}")
        return None


def is_interface_active_native(interface):
    """
    Check the link state of an interface.

    Returns True/False from the dynamic store, or None when unknown.
    """
    if not SystemConfiguration:
        return None

    try:
        store = SystemConfiguration.SCDynamicStoreCreate(None, STORE_NAME, None, None)
        if not store:
            return None

        link_dict = SystemConfiguration.SCDynamicStoreCopyValue(
            store, f"State:/Network/Interface/{interface}/Link"
        )
        if not link_dict:
            return None
        return bool(link_dict.get("Active", False))

    except Exception as e:
        logger.debug(f"Native link state lookup for {interface} failed: {e}")
        return None
