"""URL extraction helpers shared by detectors and the fetch pipeline."""

import re

# Runs up to the next whitespace, quote, angle bracket or parenthesis.
_CONTENT_URL_PATTERN = re.compile(r"https?://[^\s'\"<>()]+")

# Commands only stop at whitespace and quotes so that query strings with
# parentheses survive intact.
_COMMAND_URL_PATTERN = re.compile(r"https?://[^\s'\"]+")


def extract_urls(text: str) -> list[str]:
    """Return every http(s) URL in ``text``, deduplicated, first-seen order."""
    return list(dict.fromkeys(_CONTENT_URL_PATTERN.findall(text)))


def extract_command_urls(command: str) -> list[str]:
    return list(dict.fromkeys(_COMMAND_URL_PATTERN.findall(command)))


def first_command_url(command: str) -> str | None:
    """Return the first http(s) URL in a command line, or None."""
    match = _COMMAND_URL_PATTERN.search(command)
    return match.group(0) if match else None
