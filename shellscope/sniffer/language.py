"""Language sniffer: guesses a highlighting tag for a blob of script text.

Rules are evaluated top to bottom and the first hit wins. The markers are
plain substrings, so a Python script that happens to contain ``$`` inside
a string literal is reported as PowerShell. That is a known limitation of
the heuristic, not something to patch around here.
"""

DEFAULT_LANGUAGE = "text"

# (language, markers), order is significant
LANGUAGE_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bash", ("#!/bin/bash", "#!/bin/sh")),
    ("powershell", ("function ", "$", "param(")),
    ("python", ("import ", "def ", "python")),
    ("javascript", ("const ", "let ", "var ")),
    ("c", ("#include", "int main")),
    ("java", ("public class", "import java")),
)


def detect_language(text: str) -> str:
    """Return the first language whose markers appear in ``text``."""
    for language, markers in LANGUAGE_MARKERS:
        if any(marker in text for marker in markers):
            return language
    return DEFAULT_LANGUAGE
