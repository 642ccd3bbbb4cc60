"""Sniffers: content heuristics used by the command detectors.

Public API:
    detect_language(text) -> str
    detect_binary(content, source_url=None) -> BinaryInfo
    extract_urls(text) -> list[str]
"""

from shellscope.sniffer.binary import detect_binary
from shellscope.sniffer.language import detect_language
from shellscope.sniffer.types import BinaryInfo, format_file_size
from shellscope.sniffer.urls import extract_command_urls, extract_urls, first_command_url

__all__ = [
    "BinaryInfo",
    "detect_binary",
    "detect_language",
    "extract_command_urls",
    "extract_urls",
    "first_command_url",
    "format_file_size",
]
