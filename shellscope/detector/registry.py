"""Package-manager and programming-tool registries.

The classifier receives a Registry at construction time instead of reading
module-level tables, so deployments can extend the tables from a YAML file
(``Settings.registry_path``) without touching code.

YAML layout (both sections optional; entries override defaults by key):

    package_managers:
      brew:
        name: Homebrew
        description: The missing package manager for macOS
        search_url_template: https://formulae.brew.sh/formula/{package}
        install_pattern: 'brew\\s+install\\s+([^\\s]+)'
    programming_tools:
      node:
        name: Node.js
        description: JavaScript runtime
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml

from shellscope.detector import defaults

logger = logging.getLogger(__name__)

_PACKAGE_MANAGER_FIELDS = ("name", "description", "search_url_template", "install_pattern")
_PROGRAMMING_TOOL_FIELDS = ("name", "description")


class RegistryError(ValueError):
    """Raised when a registry definition is malformed."""


@dataclass(frozen=True)
class PackageManagerSpec:
    name: str
    description: str
    search_url_template: str
    install_pattern: re.Pattern

    def search_url(self, package: str) -> str:
        return self.search_url_template.replace("{package}", package)

    def extract_package(self, command: str) -> Optional[str]:
        """Return the first non-empty capture group of the install pattern."""
        match = self.install_pattern.search(command)
        if not match:
            return None
        return next((group for group in match.groups() if group), None)


@dataclass(frozen=True)
class ProgrammingToolSpec:
    name: str
    description: str


@dataclass(frozen=True)
class Registry:
    """Read-only lookup tables, keyed by command token, in detection order."""

    package_managers: Mapping[str, PackageManagerSpec]
    programming_tools: Mapping[str, ProgrammingToolSpec]

    def __post_init__(self) -> None:
        object.__setattr__(self, "package_managers", MappingProxyType(dict(self.package_managers)))
        object.__setattr__(self, "programming_tools", MappingProxyType(dict(self.programming_tools)))


def build_registry(
    package_managers: Mapping[str, Mapping[str, str]],
    programming_tools: Mapping[str, Mapping[str, str]],
) -> Registry:
    """Validate raw table entries and compile install patterns.

    Raises:
        RegistryError: On a missing field, a non-compiling pattern, or a
            pattern without a capture group.
    """
    managers: dict[str, PackageManagerSpec] = {}
    for key, entry in package_managers.items():
        _require_fields("package_managers", key, entry, _PACKAGE_MANAGER_FIELDS)
        try:
            pattern = re.compile(entry["install_pattern"])
        except re.error as exc:
            raise RegistryError(
                f"package_managers.{key}: invalid install_pattern: {exc}"
            ) from exc
        if pattern.groups < 1:
            raise RegistryError(
                f"package_managers.{key}: install_pattern needs a capture group"
            )
        managers[str(key)] = PackageManagerSpec(
            name=str(entry["name"]),
            description=str(entry["description"]),
            search_url_template=str(entry["search_url_template"]),
            install_pattern=pattern,
        )

    tools: dict[str, ProgrammingToolSpec] = {}
    for key, entry in programming_tools.items():
        _require_fields("programming_tools", key, entry, _PROGRAMMING_TOOL_FIELDS)
        tools[str(key)] = ProgrammingToolSpec(
            name=str(entry["name"]),
            description=str(entry["description"]),
        )

    return Registry(package_managers=managers, programming_tools=tools)


def default_registry() -> Registry:
    return build_registry(defaults.PACKAGE_MANAGERS, defaults.PROGRAMMING_TOOLS)


def load_registry(path: Path | str, base: Optional[Registry] = None) -> Registry:
    """Load ``base`` (the default tables when omitted) extended by a YAML file.

    File entries override base entries with the same key, keeping their
    position in detection order; new entries are appended.

    Raises:
        RegistryError: If the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise RegistryError(f"Cannot load registry file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise RegistryError(f"Registry file {path} must contain a mapping")

    base = base or default_registry()
    extra = build_registry(
        _section(raw, "package_managers", path),
        _section(raw, "programming_tools", path),
    )

    managers = dict(base.package_managers)
    managers.update(extra.package_managers)
    tools = dict(base.programming_tools)
    tools.update(extra.programming_tools)
    registry = Registry(package_managers=managers, programming_tools=tools)
    logger.info(
        "Loaded registry from %s: %d package managers, %d programming tools",
        path,
        len(registry.package_managers),
        len(registry.programming_tools),
    )
    return registry


def _section(raw: dict, name: str, path: Path) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise RegistryError(f"{path}: '{name}' must be a mapping")
    return section


def _require_fields(section: str, key, entry, fields: tuple[str, ...]) -> None:
    if not isinstance(entry, Mapping):
        raise RegistryError(f"{section}.{key}: entry must be a mapping")
    missing = [f for f in fields if not entry.get(f)]
    if missing:
        raise RegistryError(f"{section}.{key}: missing {', '.join(missing)}")
