"""Shared types for the detector module.

Every detector produces a CommandAnalysis. Results are frozen: warnings and
urls are tuples, parameters a read-only mapping, so a result handed to a
caller cannot be changed behind its back and no state leaks between
classifications.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol

from shellscope.fetcher.types import FetchResult
from shellscope.sniffer.types import BinaryInfo

UNKNOWN_TYPE = "Unknown"
UNKNOWN_DESCRIPTION = "Unrecognized command"


@dataclass(frozen=True)
class PackageInfo:
    """Package targeted by a package-manager install command."""

    package_name: str
    package_manager: str
    description: str
    search_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "package_name": self.package_name,
            "package_manager": self.package_manager,
            "description": self.description,
            "search_url": self.search_url,
        }


@dataclass(frozen=True)
class CommandAnalysis:
    """Classification of a single command line.

    type: Category label, e.g. "cURL - HTTP Download".
    warnings: Family-specific warnings first, generic safety warnings last.
        Duplicates are kept.
    extracted_code: The command itself, inline code pulled out of it, or
        the fetched remote content.
    urls: Deduplicated, first-seen order.
    """

    type: str = UNKNOWN_TYPE
    description: str = UNKNOWN_DESCRIPTION
    warnings: tuple[str, ...] = ()
    extracted_code: Optional[str] = None
    code_language: str = "text"
    urls: tuple[str, ...] = ()
    parameters: Mapping[str, Any] = field(default_factory=dict)
    package_info: Optional[PackageInfo] = None
    binary_info: Optional[BinaryInfo] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(self, "urls", tuple(dict.fromkeys(self.urls)))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def with_warnings(self, *warnings: str) -> "CommandAnalysis":
        """Return a copy with ``warnings`` appended."""
        if not warnings:
            return self
        return replace(self, warnings=self.warnings + warnings)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "description": self.description,
            "warnings": list(self.warnings),
            "extracted_code": self.extracted_code,
            "code_language": self.code_language,
            "urls": list(self.urls),
            "parameters": dict(self.parameters),
            "package_info": self.package_info.to_dict() if self.package_info else None,
            "binary_info": self.binary_info.to_dict() if self.binary_info else None,
        }


class ContentSource(Protocol):
    """Anything that can fetch a URL without raising (ContentFetcher in prod)."""

    async def fetch(self, url: str) -> FetchResult:
        """Return a FetchResult for ``url``."""


class Detector(Protocol):
    """One command family: recognise it and describe it, or return None."""

    name: str

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        """Return an analysis when ``command`` belongs to this family."""
