"""wget downloads, typically ``wget -qO- https://host/install.sh | sh``."""

import re
from typing import Any, Optional

from shellscope.detector.remote import apply_fetch, pipes_to_shell
from shellscope.detector.types import CommandAnalysis, ContentSource
from shellscope.sniffer import first_command_url

PIPE_TO_SHELL_WARNING = "DANGER: Command will automatically execute the downloaded file!"

# -O-, -qO-, -O -, --output-document=-
_STDOUT_OUTPUT = re.compile(r"(?<!\S)(?:-[A-Za-z]*O\s*-|--output-document=-)(?!\S)")


class WgetDetector:
    name = "wget"

    def __init__(self, fetcher: ContentSource) -> None:
        self.fetcher = fetcher

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        if not command.startswith("wget"):
            return None

        parameters: dict[str, Any] = {}
        if _STDOUT_OUTPUT.search(command):
            parameters["output"] = "stdout (direct output)"

        warnings: list[str] = []
        extracted_code: Optional[str] = None
        code_language = "bash"
        urls: list[str] = []
        binary_info = None

        url = first_command_url(command)
        if url:
            remote = apply_fetch(await self.fetcher.fetch(url), command, code_language)
            extracted_code = remote.extracted_code
            code_language = remote.code_language
            urls = remote.urls
            binary_info = remote.binary_info
            warnings.extend(remote.warnings)
            if remote.ok and pipes_to_shell(command):
                warnings.append(PIPE_TO_SHELL_WARNING)

        return CommandAnalysis(
            type="wget - File Download",
            description="Command to download files from internet",
            warnings=tuple(warnings),
            extracted_code=extracted_code,
            code_language=code_language,
            urls=tuple(urls),
            parameters=parameters,
            binary_info=binary_info,
        )
