"""Pydantic schemas for the analysis endpoints.

Follows RORO pattern: receive a typed object, return a typed object.
"""

from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

MAX_COMMAND_LENGTH = 4096


class AnalyzeRequest(BaseModel):
    """A single pasted command line."""

    command: str = Field(
        ...,
        min_length=1,
        max_length=MAX_COMMAND_LENGTH,
        description="The command exactly as it was pasted",
    )


class PackageInfoResponse(BaseModel):
    package_name: str
    package_manager: str
    description: str
    search_url: Optional[str] = None


class BinaryInfoResponse(BaseModel):
    is_binary: bool
    mime_type: Optional[str] = None
    file_extension: Optional[str] = None
    file_name: Optional[str] = None
    size: Optional[int] = None
    size_display: Optional[str] = None
    warning: Optional[str] = None


class AnalyzeResponse(BaseModel):
    """Classification of the submitted command."""

    type: str
    description: str
    warnings: list[str]
    extracted_code: Optional[str] = None
    code_language: str
    urls: list[str]
    parameters: dict[str, Any]
    package_info: Optional[PackageInfoResponse] = None
    binary_info: Optional[BinaryInfoResponse] = None


class FetchRequest(BaseModel):
    """A remote script URL to retrieve for preview."""

    url: str = Field(..., max_length=MAX_COMMAND_LENGTH)

    @field_validator("url")
    @classmethod
    def require_http_url(cls, v: str) -> str:
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return v.strip()


class RelayAttemptResponse(BaseModel):
    route: str
    status_code: Optional[int] = None
    content_length: int = 0
    error: Optional[str] = None


class FetchResponse(BaseModel):
    """Fetch outcome; ``preview`` is the content or a readable placeholder."""

    ok: bool
    url: str
    final_url: str
    route: Optional[str] = None
    content: Optional[str] = None
    failure_reason: Optional[str] = None
    preview: str
    attempts: list[RelayAttemptResponse] = Field(default_factory=list)
