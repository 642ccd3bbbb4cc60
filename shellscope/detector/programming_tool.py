"""Interpreter / SDK invocations (python, python3, flutter, dart)."""

from typing import Optional

from shellscope.detector.python_inline import NETWORK_WARNING, extract_inline_code, uses_network
from shellscope.detector.registry import Registry
from shellscope.detector.types import CommandAnalysis
from shellscope.sniffer import extract_urls

INLINE_EXECUTION_WARNING = "This command executes inline code"

_PYTHON_TOKENS = {"python", "python3"}


class ProgrammingToolDetector:
    """Matches a command that is exactly a registered token or starts with ``<token> ``.

    For Python with ``-c`` the quoted inline code is pulled out the same
    way the inline-Python detector does it, since this detector runs first
    and would otherwise hide the code behind the raw command line.
    """

    name = "programming_tool"

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        for token, spec in self.registry.programming_tools.items():
            if command != token and not command.startswith(token + " "):
                continue

            is_python = token in _PYTHON_TOKENS
            warnings: list[str] = []
            extracted_code = command
            urls: list[str] = []

            if "-c" in command:
                warnings.append(INLINE_EXECUTION_WARNING)
                inline_code = extract_inline_code(command) if is_python else None
                if inline_code is not None:
                    extracted_code = inline_code
                    urls = extract_urls(inline_code)
                if is_python and uses_network(command):
                    warnings.append(NETWORK_WARNING)

            return CommandAnalysis(
                type=f"{spec.name} - Programming Tool",
                description=spec.description,
                warnings=tuple(warnings),
                extracted_code=extracted_code,
                code_language="python" if is_python else "bash",
                urls=tuple(urls),
            )
        return None
