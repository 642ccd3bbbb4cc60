"""Helpers shared by the detectors that fetch remote content.

curl, wget and PowerShell all download a script before it runs. They hand
the fetch outcome to ``apply_fetch`` and only add their family-specific
warnings on top.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from shellscope.fetcher.types import FetchResult
from shellscope.sniffer import (
    BinaryInfo,
    detect_binary,
    detect_language,
    extract_command_urls,
    extract_urls,
)

FETCH_FAILED_WARNING = "Unable to download content for preview"

# `| bash`, `|sh`, `| sudo bash`, `| sudo -E bash -`
_PIPE_TO_SHELL = re.compile(r"\|\s*(?:sudo\s+(?:-\S+\s+)*)?(?:bash|sh)\b")


@dataclass
class RemoteContent:
    """The analysis fields a network detector takes from one fetch."""

    ok: bool
    extracted_code: Optional[str]
    code_language: str
    urls: list[str] = field(default_factory=list)
    binary_info: Optional[BinaryInfo] = None
    warnings: list[str] = field(default_factory=list)


def profile_content(content: str, source_url: Optional[str] = None) -> RemoteContent:
    """Run the binary, language and URL sniffers over fetched content.

    Binary content keeps the ``text`` language and is not scanned for URLs.
    """
    binary = detect_binary(content, source_url)
    if binary.is_binary:
        return RemoteContent(
            ok=True,
            extracted_code=content,
            code_language="text",
            binary_info=binary,
            warnings=[binary.warning] if binary.warning else [],
        )
    return RemoteContent(
        ok=True,
        extracted_code=content,
        code_language=detect_language(content),
        urls=extract_urls(content),
    )


def apply_fetch(
    fetched: FetchResult,
    command: str,
    failure_language: str,
    failure_code: Optional[str] = None,
) -> RemoteContent:
    """Turn a FetchResult into the fields of a network detector's analysis.

    On success the fetched body is profiled. On failure the URLs come from
    the command itself, ``extracted_code`` is ``failure_code`` (by default
    ``Download error: <reason>``) and the fetch-failed warning is added.
    """
    if fetched.ok:
        return profile_content(fetched.content, fetched.final_url)
    if failure_code is None:
        failure_code = f"Download error: {fetched.failure_reason}"
    return RemoteContent(
        ok=False,
        extracted_code=failure_code,
        code_language=failure_language,
        urls=extract_command_urls(command),
        warnings=[FETCH_FAILED_WARNING],
    )


def pipes_to_shell(command: str) -> bool:
    return _PIPE_TO_SHELL.search(command) is not None


def short_flags(command: str) -> set[str]:
    """Letters of every clustered short-flag token, e.g. ``-fsSL`` -> {f,s,S,L}."""
    letters: set[str] = set()
    for token in command.split():
        if re.fullmatch(r"-[A-Za-z]+", token):
            letters.update(token[1:])
    return letters


def long_flags(command: str) -> set[str]:
    """Long-flag names without values, e.g. ``--output-document=-`` -> output-document."""
    return {
        token[2:].split("=", 1)[0]
        for token in command.split()
        if token.startswith("--") and len(token) > 2
    }
