"""Analysis endpoints.

POST /analyze classifies a pasted command; POST /fetch retrieves a remote
script for preview on its own. Both can trigger outbound requests and are
throttled per client address via SlowAPI (default: 30/minute).
"""

import logging

from fastapi import APIRouter, Depends, Request

from shellscope.api.dependencies import get_classifier, get_fetcher
from shellscope.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    FetchRequest,
    FetchResponse,
)
from shellscope.core.config import get_settings
from shellscope.core.limiter import limiter
from shellscope.detector.orchestrator import Classifier
from shellscope.fetcher.client import ContentFetcher
from shellscope.fetcher.placeholder import preview_text

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["analysis"])


@router.post("/analyze", response_model=AnalyzeResponse)
@limiter.limit(settings.analyze_rate_limit)
async def analyze_command(
    request: Request,
    body: AnalyzeRequest,
    classifier: Classifier = Depends(get_classifier),
) -> AnalyzeResponse:
    """Explain what the submitted command would do."""
    result = await classifier.classify(body.command)
    return AnalyzeResponse.model_validate(result.to_dict())


@router.post("/fetch", response_model=FetchResponse)
@limiter.limit(settings.analyze_rate_limit)
async def fetch_script(
    request: Request,
    body: FetchRequest,
    fetcher: ContentFetcher = Depends(get_fetcher),
) -> FetchResponse:
    """Retrieve a remote script through the configured routes."""
    result = await fetcher.fetch(body.url)
    if not result.ok:
        logger.info("Fetch of %s produced no content: %s", body.url, result.failure_reason)
    return FetchResponse(**result.to_dict(), preview=preview_text(result))
