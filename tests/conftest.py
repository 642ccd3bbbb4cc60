"""Shared test fixtures for the shellscope test suite.

Nothing here touches the network: detectors get a StubFetcher that serves
canned content, and the HTTP app is driven in-process via ASGITransport.
"""

from collections.abc import AsyncGenerator
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from shellscope.api.dependencies import get_classifier, get_fetcher
from shellscope.api.main import create_app
from shellscope.core.config import Settings, get_settings
from shellscope.detector.orchestrator import Classifier
from shellscope.detector.registry import default_registry
from shellscope.fetcher.types import FetchResult, RelayAttempt

BASH_SCRIPT = (
    "#!/bin/bash\n"
    "set -euo pipefail\n"
    "echo 'Installing tool...'\n"
    "curl -fsSL https://releases.example.com/tool.tar.gz -o /tmp/tool.tar.gz\n"
    "tar -xzf /tmp/tool.tar.gz -C /usr/local/bin\n"
)

FAILURE_REASON = "all routes failed (direct: HTTP 404)"


# ---------------------------------------------------------------------------
# Stub content source
# ---------------------------------------------------------------------------

class StubFetcher:
    """Serves one canned body (or a failure) for every URL and records calls."""

    def __init__(self, content: Optional[str] = None, failure_reason: str = FAILURE_REASON) -> None:
        self.content = content
        self.failure_reason = failure_reason
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        if self.content is None:
            return FetchResult(
                url=url,
                final_url=url,
                failure_reason=self.failure_reason,
                attempts=[RelayAttempt(route="direct", status_code=404, error="HTTP 404")],
            )
        return FetchResult(
            url=url,
            final_url=url,
            content=self.content,
            route="direct",
            attempts=[RelayAttempt(route="direct", status_code=200, content_length=len(self.content))],
        )


@pytest.fixture
def make_fetcher():
    """Factory for StubFetcher: ``make_fetcher(content)`` or ``make_fetcher()`` to fail."""
    return StubFetcher


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def classifier(registry) -> Classifier:
    """Classifier whose fetches always succeed with a bash install script."""
    return Classifier(registry=registry, fetcher=StubFetcher(BASH_SCRIPT))


@pytest.fixture
def offline_classifier(registry) -> Classifier:
    """Classifier whose fetches always fail."""
    return Classifier(registry=registry, fetcher=StubFetcher())


# ---------------------------------------------------------------------------
# HTTP app
# ---------------------------------------------------------------------------

def _override_settings() -> Settings:
    return Settings(debug=False, block_private_hosts=True)


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher(BASH_SCRIPT)


@pytest.fixture
def app(registry, stub_fetcher):
    """FastAPI app with the classifier and fetcher dependencies stubbed.

    The SlowAPI limiter keeps its buckets in process memory, so they are
    reset before each test.
    """
    from shellscope.core.limiter import limiter

    limiter.reset()

    test_app = create_app()
    test_app.dependency_overrides[get_settings] = _override_settings
    test_app.dependency_overrides[get_classifier] = lambda: Classifier(
        registry=registry, fetcher=stub_fetcher
    )
    test_app.dependency_overrides[get_fetcher] = lambda: stub_fetcher
    return test_app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
