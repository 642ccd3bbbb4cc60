"""Redirect resolution for fetch targets.

Short links (``https://example.com/install``) usually answer with a chain
of redirects to the real script. Resolution is best-effort: a known
shortcut is used without a network round-trip, otherwise HEAD requests
walk the ``Location`` chain one hop at a time, and any failure falls back
to the original URL.

Hops are followed by hand rather than with httpx's ``follow_redirects`` so
the SSRF guard sees every host in the chain, not only the first one.
"""

import logging
from typing import Optional, Sequence

import httpx

from shellscope.fetcher.guard import is_private_host
from shellscope.fetcher.types import RedirectShortcut

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5


def match_shortcut(
    url: str,
    shortcuts: Sequence[RedirectShortcut],
) -> Optional[RedirectShortcut]:
    """Return the first shortcut whose pattern matches ``url``."""
    for shortcut in shortcuts:
        if shortcut.matches(url):
            return shortcut
    return None


def next_hop(response: httpx.Response) -> Optional[str]:
    """Absolute URL of the response's redirect target, or None if it has none."""
    if not response.is_redirect:
        return None
    location = response.headers.get("Location", "").strip()
    if not location:
        return None
    return str(response.url.join(location))


async def resolve_redirect(
    client: httpx.AsyncClient,
    url: str,
    shortcuts: Sequence[RedirectShortcut] = (),
    timeout: float = 5.0,
    block_private_hosts: bool = True,
    max_redirects: int = MAX_REDIRECTS,
) -> str:
    """Return the final URL after redirects, or ``url`` unchanged on failure.

    A chain that leads to a private host, or runs past ``max_redirects``
    hops, also yields ``url`` unchanged.
    """
    shortcut = match_shortcut(url, shortcuts)
    if shortcut is not None:
        logger.debug("Redirect shortcut %s: %s -> %s", shortcut.title, url, shortcut.target)
        return shortcut.target

    current = url
    for _hop in range(max_redirects + 1):
        if block_private_hosts and await is_private_host(current):
            logger.debug("Not resolving redirects through private host: %s", current)
            return url

        try:
            response = await client.head(current, follow_redirects=False, timeout=timeout)
            location = next_hop(response)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.debug("Redirect lookup failed for %s: %s", current, exc)
            return url

        if location is None:
            break
        current = location
    else:
        logger.debug("Gave up on %s after %d redirects", url, max_redirects)
        return url

    if current != url:
        logger.debug("Redirect detected: %s -> %s", url, current)
    return current
