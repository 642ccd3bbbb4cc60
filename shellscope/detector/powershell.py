"""PowerShell web requests (``iwr``, ``irm`` and their long forms).

The usual shape is ``irm https://host/script.ps1 | iex``: download a
script and hand it straight to Invoke-Expression. When a URL is present the
script is fetched so the user can read it first.
"""

import logging
import re
from typing import Any, Optional

from shellscope.detector.remote import apply_fetch
from shellscope.detector.types import CommandAnalysis, ContentSource
from shellscope.sniffer import first_command_url

logger = logging.getLogger(__name__)

AUTO_EXECUTE_WARNING = "WARNING: The command will automatically execute the downloaded code!"
REMOTE_CODE_CAUTION = (
    "Command would download and execute remote code - exercise extreme caution!"
)

_TRIGGERS = ("iwr", "Invoke-WebRequest", "irm", "Invoke-RestMethod")
_PIPE_TO_IEX = re.compile(r"\|\s*(?:iex|Invoke-Expression)\b")


class PowerShellDetector:
    name = "powershell"

    def __init__(self, fetcher: ContentSource) -> None:
        self.fetcher = fetcher

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        if not any(trigger in command for trigger in _TRIGGERS):
            return None

        warnings: list[str] = []
        parameters: dict[str, Any] = {}
        extracted_code = command
        code_language = "powershell"
        urls: list[str] = []
        binary_info = None

        url = first_command_url(command)
        if url:
            logger.debug("Analyzing PowerShell command with URL: %s", url)
            fetched = await self.fetcher.fetch(url)
            remote = apply_fetch(fetched, command, code_language, failure_code=command)
            extracted_code = remote.extracted_code
            code_language = remote.code_language
            urls = remote.urls
            binary_info = remote.binary_info
            warnings.extend(remote.warnings)
            if not remote.ok:
                warnings.append(REMOTE_CODE_CAUTION)
            elif binary_info is None:
                content_warning = _describe_content(fetched.content)
                if content_warning:
                    warnings.append(content_warning)

        if _PIPE_TO_IEX.search(command):
            warnings.append(AUTO_EXECUTE_WARNING)

        if "select -ExpandProperty Content" in command:
            parameters["expansion"] = "extracts only text content"

        return CommandAnalysis(
            type="PowerShell - Web Request",
            description="PowerShell command to download web content",
            warnings=tuple(warnings),
            extracted_code=extracted_code,
            code_language=code_language,
            urls=tuple(urls),
            parameters=parameters,
            binary_info=binary_info,
        )


def _describe_content(content: str) -> Optional[str]:
    if "#!/bin/bash" in content or "#!/bin/sh" in content:
        return "Content is a bash script that would be executed"
    if "function " in content or "$" in content or "param(" in content:
        return "Content contains PowerShell code"
    if "python" in content or "import " in content:
        return "Content contains Python code"
    return None
