"""Content fetcher: retrieves the script a command would download.

Fetch flow:
1. Resolve redirects (known shortcut, else HEAD requests hop by hop;
   failures ignored).
2. Try each configured route in order. A route succeeds when it answers
   with a non-error status and a body longer than ``min_content_length``
   (shorter bodies are relay stub / error pages). The first success is
   returned immediately; remaining routes are not contacted.
   Bodies are streamed and abandoned past ``max_content_bytes``, and
   redirects are followed one hop at a time through the SSRF guard.
3. If every route fails, return a FetchResult with ``failure_reason`` set.

Nothing here raises for network trouble. Each attempt has its own timeout.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx

from shellscope.core.config import Settings
from shellscope.fetcher.guard import is_private_host
from shellscope.fetcher.redirects import (
    MAX_REDIRECTS,
    match_shortcut,
    next_hop,
    resolve_redirect,
)
from shellscope.fetcher.relays import DEFAULT_SHORTCUTS, resolve_routes
from shellscope.fetcher.types import (
    FetchResult,
    RedirectShortcut,
    RelayAttempt,
    RelayRoute,
    ResponseShape,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Body:
    data: bytes
    encoding: str

    @property
    def text(self) -> str:
        return self.data.decode(self.encoding, errors="replace")


class ContentFetcher:
    """Fetches remote script content through an ordered list of routes.

    A fresh ``httpx.AsyncClient`` is opened per fetch so concurrent
    classifications share nothing. ``transport`` is injectable for tests.
    """

    def __init__(
        self,
        routes: Sequence[RelayRoute],
        shortcuts: Sequence[RedirectShortcut] = DEFAULT_SHORTCUTS,
        timeout: float = 10.0,
        redirect_timeout: float = 5.0,
        min_content_length: int = 100,
        max_content_bytes: int = 2 * 1024 * 1024,
        max_redirects: int = MAX_REDIRECTS,
        block_private_hosts: bool = True,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.routes = list(routes)
        self.shortcuts = tuple(shortcuts)
        self.timeout = timeout
        self.redirect_timeout = redirect_timeout
        self.min_content_length = min_content_length
        self.max_content_bytes = max_content_bytes
        self.max_redirects = max_redirects
        self.block_private_hosts = block_private_hosts
        self.user_agent = user_agent
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ContentFetcher":
        return cls(
            routes=resolve_routes(settings.relay_order),
            timeout=settings.fetch_timeout_seconds,
            redirect_timeout=settings.redirect_timeout_seconds,
            min_content_length=settings.min_content_length,
            max_content_bytes=settings.max_content_bytes,
            max_redirects=settings.max_redirects,
            block_private_hosts=settings.block_private_hosts,
            user_agent=settings.user_agent,
            transport=transport,
        )

    async def fetch(self, url: str) -> FetchResult:
        """Retrieve ``url`` through the first route that yields real content."""
        headers = {"User-Agent": self.user_agent} if self.user_agent else None

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        ) as client:
            final_url = await resolve_redirect(
                client,
                url,
                shortcuts=self.shortcuts,
                timeout=self.redirect_timeout,
                block_private_hosts=self.block_private_hosts,
                max_redirects=self.max_redirects,
            )
            result = FetchResult(
                url=url,
                final_url=final_url,
                shortcut=match_shortcut(url, self.shortcuts),
            )

            for index, route in enumerate(self.routes, start=1):
                logger.debug(
                    "Fetching %s via route %d/%d (%s)",
                    final_url, index, len(self.routes), route.name,
                )
                attempt, content = await self._try_route(client, route, final_url)
                result.attempts.append(attempt)
                if content is not None:
                    result.content = content
                    result.route = route.name
                    logger.info(
                        "Fetched %s via %s (%d chars)", final_url, route.name, len(content)
                    )
                    return result

        result.failure_reason = _summarize_failures(result.attempts)
        logger.warning("All routes failed for %s: %s", result.final_url, result.failure_reason)
        return result

    async def _try_route(
        self,
        client: httpx.AsyncClient,
        route: RelayRoute,
        target: str,
    ) -> tuple[RelayAttempt, Optional[str]]:
        attempt = RelayAttempt(route=route.name)

        try:
            body = await self._download(client, route, target, attempt)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            attempt.error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
            logger.debug("Route %s failed: %s", route.name, attempt.error)
            return attempt, None
        if body is None:
            logger.debug("Route %s failed: %s", route.name, attempt.error)
            return attempt, None

        try:
            content = _read_body(route, body)
        except json.JSONDecodeError as exc:
            attempt.error = f"unreadable response: {exc}"
            return attempt, None

        attempt.content_length = len(content or "")
        if not content or not content.strip():
            attempt.error = "empty response"
            return attempt, None
        if len(content) <= self.min_content_length:
            attempt.error = f"response too short ({len(content)} chars)"
            return attempt, None

        return attempt, content

    async def _download(
        self,
        client: httpx.AsyncClient,
        route: RelayRoute,
        target: str,
        attempt: RelayAttempt,
    ) -> Optional[_Body]:
        """Stream one route's response, following redirects hop by hop.

        Returns None with ``attempt.error`` set when the route is refused,
        answers with an error status, or sends more than ``max_content_bytes``.
        """
        url = route.build_url(target)
        for hop in range(self.max_redirects + 1):
            # A relay's own host is trusted; anything it or the target
            # redirects to is fetched by us and must pass the guard.
            guarded = route.direct or hop > 0
            if guarded and self.block_private_hosts and await is_private_host(url):
                attempt.error = f"refused: {url} resolves to a private address"
                return None

            async with client.stream(
                "GET", url, headers=route.headers or None, follow_redirects=False
            ) as response:
                attempt.status_code = response.status_code
                location = next_hop(response)
                if location is not None:
                    url = location
                    continue
                if response.status_code >= 400:
                    attempt.error = f"HTTP {response.status_code}"
                    return None
                return await self._read_capped(response, attempt)

        attempt.error = f"too many redirects (more than {self.max_redirects})"
        return None

    async def _read_capped(
        self,
        response: httpx.Response,
        attempt: RelayAttempt,
    ) -> Optional[_Body]:
        limit = self.max_content_bytes
        too_large = f"response too large (over {limit} bytes)"

        declared = response.headers.get("Content-Length", "")
        if declared.isdigit() and int(declared) > limit:
            attempt.error = too_large
            return None

        chunks: list[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > limit:
                attempt.error = too_large
                return None
            chunks.append(chunk)
        return _Body(data=b"".join(chunks), encoding=response.encoding or "utf-8")


def _read_body(route: RelayRoute, body: _Body) -> Optional[str]:
    if route.response_shape == ResponseShape.JSON_CONTENTS:
        data = json.loads(body.text)
        if not isinstance(data, dict):
            return None
        contents = data.get("contents")
        return contents if isinstance(contents, str) else None
    return body.text


def _summarize_failures(attempts: list[RelayAttempt]) -> str:
    if not attempts:
        return "no retrieval routes configured"
    details = "; ".join(f"{a.route}: {a.error}" for a in attempts)
    return f"all routes failed ({details})"
