"""Generic safety checks applied to every classification result.

These look at the raw command regardless of which family matched, so
``sudo pip install x`` still reports the privilege escalation and
``curl ... && rm -rf ~/tmp`` still reports the deletion.
"""

DESTRUCTIVE_MARKERS = ("rm -rf", "del /f", "format")
PRIVILEGE_MARKERS = ("chmod +x", "sudo")

DESTRUCTIVE_WARNING = "DANGER: Command might delete files or format disks!"
PRIVILEGE_WARNING = "Command requires elevated permissions or modifies file permissions"


def generic_warnings(command: str) -> list[str]:
    """Return the generic warnings triggered by ``command``, in fixed order."""
    warnings: list[str] = []
    if any(marker in command for marker in DESTRUCTIVE_MARKERS):
        warnings.append(DESTRUCTIVE_WARNING)
    if any(marker in command for marker in PRIVILEGE_MARKERS):
        warnings.append(PRIVILEGE_WARNING)
    return warnings
