"""Inline Python execution (``python -c '...'``)."""

import re
from typing import Optional

from shellscope.detector.types import CommandAnalysis
from shellscope.sniffer import extract_urls

NETWORK_WARNING = "Python code makes network requests"

_INLINE_CODE_PATTERN = re.compile(r"-c\s+[\"']([^\"']+)[\"']")
_NETWORK_MODULES = ("urllib", "requests")


def extract_inline_code(command: str) -> Optional[str]:
    """Return the first quoted argument following ``-c``, if any."""
    match = _INLINE_CODE_PATTERN.search(command)
    return match.group(1) if match else None


def uses_network(command: str) -> bool:
    return any(module in command for module in _NETWORK_MODULES)


class InlinePythonDetector:
    """Matches any command mentioning both ``python`` and ``-c``.

    Catches invocations the programming-tool detector misses because they
    do not start with a bare token, e.g. ``/usr/bin/python3 -c`` or
    ``sudo python -c``.
    """

    name = "inline_python"

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        if "python" not in command or "-c" not in command:
            return None

        code = extract_inline_code(command)
        warnings = (NETWORK_WARNING,) if uses_network(command) else ()

        return CommandAnalysis(
            type="Python - Inline Execution",
            description="Inline Python code execution",
            warnings=warnings,
            extracted_code=code if code is not None else command,
            code_language="python",
            urls=tuple(extract_urls(code)) if code else (),
        )
