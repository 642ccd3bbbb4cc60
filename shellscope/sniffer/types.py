"""Types for the sniffer module."""

from dataclasses import dataclass
from typing import Optional


def format_file_size(size: int) -> str:
    """Render a byte count as B / KB / MB / GB with one decimal place."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    return f"{size / (1024 * 1024 * 1024):.1f} GB"


@dataclass(frozen=True)
class BinaryInfo:
    """Outcome of binary sniffing on fetched content.

    file_name / file_extension come from the tail of the source URL path
    when one was supplied; the magic-byte checks use the extension implied
    by the detected format instead.
    """

    is_binary: bool
    mime_type: Optional[str] = None
    file_extension: Optional[str] = None
    file_name: Optional[str] = None
    size: Optional[int] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "is_binary": self.is_binary,
            "mime_type": self.mime_type,
            "file_extension": self.file_extension,
            "file_name": self.file_name,
            "size": self.size,
            "size_display": format_file_size(self.size) if self.size is not None else None,
            "warning": self.warning,
        }
