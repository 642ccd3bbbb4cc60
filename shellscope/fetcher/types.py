"""Shared types for the fetcher module.

A fetch never raises: every outcome is a FetchResult. Success carries the
content and the route that produced it; failure carries a reason plus the
per-route attempts so callers can show what was tried.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional
from urllib.parse import quote


class ResponseShape(StrEnum):
    """How a relay wraps the upstream body."""

    TEXT = "text"
    JSON_CONTENTS = "json_contents"


@dataclass(frozen=True)
class RelayRoute:
    """One way of retrieving a target URL.

    prefix: Prepended to the target URL. Empty for the direct route.
    quote_target: Percent-encode the target before appending it (needed
        when the relay takes the target as a query parameter value).
    direct: The request goes straight to the target host, so the SSRF
        guard applies.
    """

    name: str
    prefix: str = ""
    response_shape: ResponseShape = ResponseShape.TEXT
    quote_target: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    direct: bool = False

    def build_url(self, target: str) -> str:
        if self.direct:
            return target
        suffix = quote(target, safe="") if self.quote_target else target
        return f"{self.prefix}{suffix}"


@dataclass(frozen=True)
class RedirectShortcut:
    """A redirector whose final URL is known ahead of time.

    Some short-link hosts cannot be resolved with a HEAD request (they
    redirect via script or block HEAD). The pattern is searched against
    the full URL; on a hit the target is used without a network call.
    """

    pattern: re.Pattern
    target: str
    title: str
    notes: tuple[str, ...] = ()

    def matches(self, url: str) -> bool:
        return self.pattern.search(url) is not None


@dataclass
class RelayAttempt:
    """Outcome of a single route attempt, kept for evidence reporting."""

    route: str
    status_code: Optional[int] = None
    content_length: int = 0
    error: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "route": self.route,
            "status_code": self.status_code,
            "content_length": self.content_length,
            "error": self.error,
        }


@dataclass
class FetchResult:
    """Tagged fetch outcome: content on success, failure_reason otherwise."""

    url: str
    final_url: str
    content: Optional[str] = None
    route: Optional[str] = None
    failure_reason: Optional[str] = None
    attempts: list[RelayAttempt] = field(default_factory=list)
    shortcut: Optional[RedirectShortcut] = None

    @property
    def ok(self) -> bool:
        return self.content is not None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "url": self.url,
            "final_url": self.final_url,
            "route": self.route,
            "content": self.content,
            "failure_reason": self.failure_reason,
            "attempts": [a.to_dict() for a in self.attempts],
        }
