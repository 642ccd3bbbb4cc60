"""FastAPI dependencies wiring the classifier and fetcher from settings.

Tests replace these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from shellscope.core.config import Settings, get_settings
from shellscope.detector.orchestrator import Classifier, build_classifier
from shellscope.fetcher.client import ContentFetcher


def get_fetcher(settings: Settings = Depends(get_settings)) -> ContentFetcher:
    return ContentFetcher.from_settings(settings)


def get_classifier(settings: Settings = Depends(get_settings)) -> Classifier:
    return build_classifier(settings)
