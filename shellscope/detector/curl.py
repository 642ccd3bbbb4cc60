"""cURL downloads, typically ``curl -fsSL https://host/install.sh | bash``."""

from typing import Any, Optional

from shellscope.detector.remote import apply_fetch, long_flags, pipes_to_shell, short_flags
from shellscope.detector.types import CommandAnalysis, ContentSource
from shellscope.sniffer import first_command_url

INSECURE_SSL_WARNING = "Command ignores SSL certificate verification"
PIPE_TO_SHELL_WARNING = "DANGER: Command will automatically execute the downloaded code!"


def parse_curl_flags(command: str) -> dict[str, Any]:
    shorts = short_flags(command)
    longs = long_flags(command)
    parameters: dict[str, Any] = {}
    if "s" in shorts or "silent" in longs:
        parameters["mode"] = "silent"
    if "L" in shorts or "location" in longs:
        parameters["redirect"] = "follow redirects"
    if "k" in shorts or "insecure" in longs:
        parameters["SSL"] = "ignore certificates"
    return parameters


class CurlDetector:
    name = "curl"

    def __init__(self, fetcher: ContentSource) -> None:
        self.fetcher = fetcher

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        if not command.startswith("curl"):
            return None

        parameters = parse_curl_flags(command)
        warnings: list[str] = []
        if "SSL" in parameters:
            warnings.append(INSECURE_SSL_WARNING)

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
            type="cURL - HTTP Download",
            description="Command to download content from URL",
            warnings=tuple(warnings),
            extracted_code=extracted_code,
            code_language=code_language,
            urls=tuple(urls),
            parameters=parameters,
            binary_info=binary_info,
        )
