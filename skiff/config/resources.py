# SPDX-License-Identifier: BUSL-1.1
"""Configuration context for a compose project.

The context is read from ``skiff.yaml`` in the project directory and passed
explicitly into every component that needs it.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path


DEFAULT_COMPOSE_FILES = ["-f", "docker-compose.yml"]


@dataclass
class ComposeContext:
    """Everything the compose layer needs to know about a project."""
    compose_files: list = field(default_factory=lambda: list(DEFAULT_COMPOSE_FILES))
    fingerprint_files: list = field(default_factory=list)
    fingerprint_directories: list = field(default_factory=list)
    current_directory: str = "."
    cache_directory: str = ""

    @property
    def base_path(self) -> Path:
        return Path(self.current_directory)

    def resolve(self, relative: str) -> Path:
        """Resolve a declared path against the project directory."""
        return self.base_path / relative


# Keys as written in skiff.yaml (kebab-case).
FILE_KEYS = {
    "docker-compose-files": "compose_files",
    "docker-fingerprint-files": "fingerprint_files",
    "docker-fingerprint-directories": "fingerprint_directories",
    "cache-directory": "cache_directory",
}


def _aliases(field_name: str) -> list:
    parts = field_name.split("_")
    camel = parts[0] + "".join(p.capitalize() for p in parts[1:])
    kebab = "-".join(parts)
    return [field_name, camel, kebab]


def _alias_map() -> dict:
    alias_map = {}
    for f in fields(ComposeContext):
        for alias in _aliases(f.name):
            alias_map[alias] = f.name
    for key, field_name in FILE_KEYS.items():
        alias_map[key] = field_name
        parts = key.split("-")
        alias_map[parts[0] + "".join(p.capitalize() for p in parts[1:])] = field_name
    return alias_map


def context_from_dict(data: dict, current_directory: str = ".") -> ComposeContext:
    """Build a ComposeContext from a parsed YAML mapping.

    Unknown keys are ignored. Values are passed through unchecked;
    validate_context() reports type problems.
    """
    alias_map = _alias_map()
    kwargs = {"current_directory": str(current_directory)}
    for key, val in (data or {}).items():
        field_name = alias_map.get(str(key))
        if field_name is None or field_name == "current_directory":
            continue
        if val is None:
            continue
        kwargs[field_name] = val
    return ComposeContext(**kwargs)


def context_to_dict(context: ComposeContext) -> dict:
    """Convert a context back to the skiff.yaml layout."""
    data = {}
    for key, field_name in FILE_KEYS.items():
        value = getattr(context, field_name)
        if field_name == "cache_directory" and not value:
            continue
        data[key] = list(value) if isinstance(value, (list, tuple)) else value
    return data
