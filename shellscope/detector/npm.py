"""npm / npx invocations not already claimed by the package-manager table."""

from typing import Optional

from shellscope.detector.package_manager import GLOBAL_INSTALL_WARNING
from shellscope.detector.types import CommandAnalysis

NPX_WARNING = "npx may download and run a package that is not installed locally"


class NpmDetector:
    name = "npm"

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        is_npm = command.startswith("npm ")
        if not is_npm and not command.startswith("npx "):
            return None

        warnings: list[str] = []
        if "install" in command and "-g" in command:
            warnings.append(GLOBAL_INSTALL_WARNING)
        if not is_npm:
            warnings.append(NPX_WARNING)

        return CommandAnalysis(
            type="npm - Node Package Manager" if is_npm else "npx - Node Package Execute",
            description="Command to manage or execute Node.js packages",
            warnings=tuple(warnings),
            extracted_code=command,
            code_language="bash",
        )
