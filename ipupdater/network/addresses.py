"""
Address classification for IP Updater.

Only RFC1918 IPv4 addresses are reported. Loopback, link-local and
everything else are rejected.
"""

import ipaddress

PRIVATE_NETWORKS = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
)


def is_private_ipv4(address):
    """Return True if address is dotted-decimal IPv4 inside an RFC1918 range."""
    if not isinstance(address, str):
        return False
    try:
        ip = ipaddress.IPv4Address(address.strip())
    except ValueError:
        return False
    return any(ip in network for network in PRIVATE_NETWORKS)


def first_private_ipv4(candidates):
    """Return the first RFC1918 address among candidates, or None."""
    for candidate in candidates or []:
        if is_private_ipv4(candidate):
            return candidate.strip()
    return None
