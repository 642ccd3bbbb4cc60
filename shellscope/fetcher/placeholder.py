"""Placeholder documents for fetches that produced no content.

The fetcher reports failure as data; turning that into something a user
can read in place of the script is a presentation concern and lives here.
The output is a commented pseudo-script so it still renders sensibly in a
code viewer.
"""

from shellscope.fetcher.types import FetchResult


def render_placeholder(result: FetchResult) -> str:
    """Return the display text for a failed fetch."""
    if result.shortcut is not None:
        return _shortcut_placeholder(result)
    return _generic_placeholder(result)


def preview_text(result: FetchResult) -> str:
    """Fetched content when available, otherwise the placeholder."""
    if result.ok:
        return result.content
    return render_placeholder(result)


def _shortcut_placeholder(result: FetchResult) -> str:
    shortcut = result.shortcut
    lines = [
        f"# {shortcut.title}",
        "",
        f"# Original URL: {result.url}",
        f"# Expected to redirect to: {shortcut.target}",
        "",
        "# WARNING: Unable to download the actual script content",
    ]
    lines.extend(f"# {note}" for note in shortcut.notes)
    lines.extend([
        "",
        "# SECURITY NOTICE:",
        "# Always review scripts before piping them into an interpreter",
        "",
        f'Write-Host "{shortcut.title} - content not available for preview"',
    ])
    return "\n".join(lines)


def _generic_placeholder(result: FetchResult) -> str:
    lines = [
        "# Script Download Failed",
        f"# Original URL: {result.url}",
    ]
    if result.final_url != result.url:
        lines.append(f"# Resolved URL: {result.final_url}")
    lines.extend([
        "",
        "# Unable to download script content for preview",
        "# This command would download code from the internet and run it",
        "# without showing it to you first.",
    ])
    if result.failure_reason:
        lines.extend(["", f"# Reason: {result.failure_reason}"])
    lines.extend([
        "",
        "# SECURITY WARNING:",
        "# Only run this command if you completely trust the source.",
        "# Consider downloading and reviewing the script manually first.",
    ])
    return "\n".join(lines)
