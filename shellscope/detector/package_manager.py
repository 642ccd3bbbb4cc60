"""Package-manager invocations (pip, npm, winget, cargo, ...)."""

from typing import Optional

from shellscope.detector.registry import Registry
from shellscope.detector.types import CommandAnalysis, PackageInfo

INSTALL_WARNING = "This command will install software on your system"
GLOBAL_INSTALL_WARNING = "Global package installation"


class PackageManagerDetector:
    """Matches ``<prefix> ...`` or ``... <prefix> ...`` for any registered prefix.

    The infix form catches ``sudo pip install x`` and ``cd app && npm i x``.
    """

    name = "package_manager"

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    async def try_match(self, command: str) -> Optional[CommandAnalysis]:
        for prefix, spec in self.registry.package_managers.items():
            if not (command.startswith(prefix + " ") or f" {prefix} " in command):
                continue

            package_info = None
            package_name = spec.extract_package(command)
            if package_name:
                package_info = PackageInfo(
                    package_name=package_name,
                    package_manager=spec.name,
                    description=f"Installing package: {package_name}",
                    search_url=spec.search_url(package_name),
                )

            warnings: list[str] = []
            installs = "install" in command or "add" in command
            if installs:
                warnings.append(INSTALL_WARNING)
            if installs and _is_global(command):
                warnings.append(GLOBAL_INSTALL_WARNING)

            return CommandAnalysis(
                type=f"{spec.name} - Package Manager",
                description=spec.description,
                warnings=tuple(warnings),
                extracted_code=command,
                code_language="bash",
                package_info=package_info,
            )
        return None


def _is_global(command: str) -> bool:
    tokens = command.split()
    return "-g" in tokens or "--global" in tokens
