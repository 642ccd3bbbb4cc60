"""Binary sniffer: tells scripts apart from executables and archives.

Checks run in order and the first hit wins:
  1. data: URL carrying an octet-stream base64 payload
  2. Windows PE header (``MZ``)
  3. Archive / ELF / PDF magic bytes
  4. Ratio of control characters (tab, LF and CR excluded) above 0.3
     on content longer than 100 characters
"""

import re
from typing import Optional
from urllib.parse import urlparse

from shellscope.sniffer.types import BinaryInfo

OCTET_STREAM_DATA_PREFIX = "data:application/octet-stream;base64,"

# (magic pattern, mime type, extension)
MAGIC_SIGNATURES: tuple[tuple[re.Pattern, str, str], ...] = (
    (re.compile(r"^PK"), "application/zip", ".zip"),
    (re.compile(r"^Rar!"), "application/x-rar-compressed", ".rar"),
    (re.compile(r"^\x7fELF"), "application/x-executable", ".bin"),
    (re.compile(r"^%PDF"), "application/pdf", ".pdf"),
)

NON_PRINTABLE_RATIO_THRESHOLD = 0.3
MIN_LENGTH_FOR_RATIO_CHECK = 100

_ALLOWED_CONTROL_CHARS = {"\t", "\n", "\r"}
_DATA_URL_PREFIX = re.compile(r"^data:[^;]+;base64,")


def detect_binary(content: str, source_url: Optional[str] = None) -> BinaryInfo:
    """Decide whether ``content`` is binary and describe it.

    ``source_url`` is only used to derive a file name and extension.
    """
    file_name = extract_file_name(source_url)

    if content.startswith(OCTET_STREAM_DATA_PREFIX):
        return BinaryInfo(
            is_binary=True,
            mime_type="application/octet-stream",
            file_extension=extract_file_extension(source_url),
            file_name=file_name,
            size=estimate_base64_size(content),
            warning="This is a binary file, not a script",
        )

    if content.startswith("MZ"):
        return BinaryInfo(
            is_binary=True,
            mime_type="application/x-msdownload",
            file_extension=".exe",
            file_name=file_name,
            warning="This is a Windows executable file",
        )

    for pattern, mime_type, extension in MAGIC_SIGNATURES:
        if pattern.match(content):
            return BinaryInfo(
                is_binary=True,
                mime_type=mime_type,
                file_extension=extension,
                file_name=file_name,
                warning=f"This is a {extension} file, not a script",
            )

    if _looks_binary(content):
        return BinaryInfo(
            is_binary=True,
            mime_type="application/octet-stream",
            file_extension=extract_file_extension(source_url),
            file_name=file_name,
            warning="This appears to be a binary file based on content analysis",
        )

    return BinaryInfo(is_binary=False)


def extract_file_name(url: Optional[str]) -> Optional[str]:
    """Return the last path segment of ``url``, or None when there is none."""
    if not url:
        return None
    try:
        path = urlparse(url).path
    except ValueError:
        return None
    name = path.rsplit("/", 1)[-1]
    return name or None


def extract_file_extension(url: Optional[str]) -> Optional[str]:
    name = extract_file_name(url)
    if not name or "." not in name:
        return None
    return name[name.rfind("."):]


def estimate_base64_size(content: str) -> int:
    """Approximate decoded size of a base64 payload, data: prefix stripped."""
    payload = _DATA_URL_PREFIX.sub("", content, count=1)
    return len(payload) * 3 // 4


def _looks_binary(content: str) -> bool:
    if len(content) <= MIN_LENGTH_FOR_RATIO_CHECK:
        return False
    control = sum(
        1 for char in content
        if ord(char) < 32 and char not in _ALLOWED_CONTROL_CHARS
    )
    return control / len(content) > NON_PRINTABLE_RATIO_THRESHOLD
