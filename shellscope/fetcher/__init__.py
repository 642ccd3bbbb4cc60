"""Fetcher module for retrieving the remote content a command points at.

Public API:
    ContentFetcher(routes, ...).fetch(url) -> FetchResult
    render_placeholder(result) -> str
"""

from shellscope.fetcher.client import ContentFetcher
from shellscope.fetcher.placeholder import preview_text, render_placeholder
from shellscope.fetcher.relays import BUILTIN_ROUTES, DEFAULT_SHORTCUTS, resolve_routes
from shellscope.fetcher.types import (
    FetchResult,
    RedirectShortcut,
    RelayAttempt,
    RelayRoute,
    ResponseShape,
)

__all__ = [
    "BUILTIN_ROUTES",
    "ContentFetcher",
    "DEFAULT_SHORTCUTS",
    "FetchResult",
    "RedirectShortcut",
    "RelayAttempt",
    "RelayRoute",
    "ResponseShape",
    "preview_text",
    "render_placeholder",
    "resolve_routes",
]
