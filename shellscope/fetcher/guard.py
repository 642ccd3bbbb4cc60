"""SSRF guard for requests this process sends to user-supplied URLs.

A pasted command can point at anything, including ``http://169.254.169.254``
or ``http://localhost:6379``. Redirect resolution and the direct route hit
the target host from our own network, so both refuse hosts that are (or
resolve to) private, loopback or link-local addresses. The check runs again
for every redirect hop, since a public host can answer with a ``Location``
pointing inside. The first request of a relay route goes to the relay, not
to the target, and is not checked.
"""

import asyncio
import ipaddress
import logging
import socket
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# RFC 1918, loopback, link-local, and IPv6 private ranges
_PRIVATE_NETWORKS: list[ipaddress.IPv4Network | ipaddress.IPv6Network] = [
    ipaddress.ip_network("127.0.0.0/8"),       # Loopback (IPv4)
    ipaddress.ip_network("10.0.0.0/8"),         # RFC 1918 private
    ipaddress.ip_network("172.16.0.0/12"),      # RFC 1918 private
    ipaddress.ip_network("192.168.0.0/16"),     # RFC 1918 private
    ipaddress.ip_network("169.254.0.0/16"),     # Link-local / cloud metadata
    ipaddress.ip_network("100.64.0.0/10"),      # Shared address space (RFC 6598)
    ipaddress.ip_network("0.0.0.0/8"),          # "This" network
    ipaddress.ip_network("::1/128"),            # IPv6 loopback
    ipaddress.ip_network("fc00::/7"),           # IPv6 unique-local
    ipaddress.ip_network("fe80::/10"),          # IPv6 link-local
]


def is_private_address(ip_str: str) -> bool:
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    # ::ffff:127.0.0.1 reaches the IPv4 loopback
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return any(ip in network for network in _PRIVATE_NETWORKS)


async def is_private_host(url: str) -> bool:
    """Return True if the URL's host is, or resolves to, a private address.

    Hosts that fail to parse or resolve are not considered private; the
    request itself will fail and be reported as a normal fetch failure.
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError as exc:
        # Malformed authority such as "http://[::1"; httpx rejects it later
        logger.debug("Cannot parse host of %s: %s", url, exc)
        return False
    if not hostname:
        return False

    if is_private_address(hostname):
        return True
    if hostname == "localhost" or hostname.endswith(".localhost"):
        return True

    loop = asyncio.get_running_loop()
    try:
        addr_infos = await loop.getaddrinfo(hostname, None)
    except (socket.gaierror, UnicodeError) as exc:
        logger.debug("Cannot resolve %s: %s", hostname, exc)
        return False

    for _family, _type, _proto, _canonname, sockaddr in addr_infos:
        if is_private_address(sockaddr[0]):
            logger.warning("Refusing %s: resolves to private address %s", hostname, sockaddr[0])
            return True
    return False
