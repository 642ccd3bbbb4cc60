"""Detector orchestrator: routes a command to the first matching family.

Classification flow:
1. Trim the command.
2. Ask each detector in priority order; the first non-None result wins.
3. Fall back to an "Unknown" result when nothing matches.
4. Append the generic safety warnings to whichever result was produced.

Detector priority (first match wins):
  package manager   → pip / npm / winget / cargo / ...
  programming tool  → python / python3 / flutter / dart
  PowerShell        → iwr / irm / Invoke-WebRequest / Invoke-RestMethod (fetches)
  curl              → curl ... (fetches)
  wget              → wget ... (fetches)
  inline Python     → anything with "python" and "-c"
  npm / npx         → npm ... / npx ...
"""

import logging
from typing import Optional, Sequence

import httpx

from shellscope.core.config import Settings, get_settings
from shellscope.detector.curl import CurlDetector
from shellscope.detector.npm import NpmDetector
from shellscope.detector.package_manager import PackageManagerDetector
from shellscope.detector.powershell import PowerShellDetector
from shellscope.detector.programming_tool import ProgrammingToolDetector
from shellscope.detector.python_inline import InlinePythonDetector
from shellscope.detector.registry import Registry, default_registry, load_registry
from shellscope.detector.safety import generic_warnings
from shellscope.detector.types import CommandAnalysis, ContentSource, Detector
from shellscope.detector.wget import WgetDetector
from shellscope.fetcher.client import ContentFetcher

logger = logging.getLogger(__name__)


def default_detectors(registry: Registry, fetcher: ContentSource) -> list[Detector]:
    """Return the detectors in their fixed priority order."""
    return [
        PackageManagerDetector(registry),
        ProgrammingToolDetector(registry),
        PowerShellDetector(fetcher),
        CurlDetector(fetcher),
        WgetDetector(fetcher),
        InlinePythonDetector(),
        NpmDetector(),
    ]


class Classifier:
    """First-match dispatch over an ordered list of detectors.

    Holds no per-call state, so one instance can serve concurrent
    classifications.
    """

    def __init__(
        self,
        registry: Registry,
        fetcher: ContentSource,
        detectors: Optional[Sequence[Detector]] = None,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.detectors = (
            list(detectors) if detectors is not None else default_detectors(registry, fetcher)
        )

    async def classify(self, command: str) -> CommandAnalysis:
        """Classify ``command``. Never raises."""
        clean = command.strip()
        result = await self._first_match(clean)
        if result is None:
            result = CommandAnalysis()
        result = result.with_warnings(*generic_warnings(clean))
        _log_result(result)
        return result

    async def _first_match(self, command: str) -> Optional[CommandAnalysis]:
        for detector in self.detectors:
            try:
                result = await detector.try_match(command)
            except Exception:
                logger.exception("Detector %s raised; trying the next one", detector.name)
                continue
            if result is not None:
                logger.debug("Detector %s matched", detector.name)
                return result
        return None


def build_classifier(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Classifier:
    """Wire a Classifier from settings: registry tables plus a ContentFetcher."""
    settings = settings or get_settings()
    registry = load_registry(settings.registry_path) if settings.registry_path else default_registry()
    fetcher = ContentFetcher.from_settings(settings, transport=transport)
    return Classifier(registry=registry, fetcher=fetcher)


async def classify(command: str, classifier: Optional[Classifier] = None) -> CommandAnalysis:
    """Classify a command with ``classifier`` or one built from the environment."""
    classifier = classifier or build_classifier()
    return await classifier.classify(command)


def _log_result(result: CommandAnalysis) -> None:
    logger.info(
        "Classification complete: type=%s language=%s warnings=%d urls=%d",
        result.type,
        result.code_language,
        len(result.warnings),
        len(result.urls),
    )
