# SPDX-License-Identifier: BUSL-1.1
"""Project configuration file discovery, loading, and saving."""

import hashlib
import os
from pathlib import Path
from typing import Optional

import yaml

from skiff.config.resources import (
    ComposeContext,
    context_from_dict,
    context_to_dict,
)
from skiff.config.validation import ConfigurationError


CONFIG_FILENAMES = ("skiff.yaml", ".skiff.yaml")
CACHE_DIR = Path.home() / ".cache" / "skiff"
CACHE_DIR_ENV = "SKIFF_CACHE_DIR"


class ConfigStore:
    """Manages the project's skiff.yaml and the per-user cache.

    Layout:
        <project>/skiff.yaml               # compose files and fingerprint inputs
        ~/.cache/skiff/
        └── fingerprints/<project-key>/    # one record per built fingerprint
    """

    def __init__(self, project_dir: Optional[Path] = None, cache_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._cache_dir = Path(cache_dir) if cache_dir else None
        self._raw_cache = None

    @property
    def config_file(self) -> Path:
        """Return the first existing config file, or the default name."""
        for name in CONFIG_FILENAMES:
            candidate = self.project_dir / name
            if candidate.is_file():
                return candidate
        return self.project_dir / CONFIG_FILENAMES[0]

    def is_initialized(self) -> bool:
        return any((self.project_dir / name).is_file() for name in CONFIG_FILENAMES)

    # ── Raw YAML ─────────────────────────────────────────────────────

    def load_raw(self) -> dict:
        """Load skiff.yaml. Missing file yields an empty mapping."""
        if self._raw_cache is not None:
            return self._raw_cache
        path = self.config_file
        if not path.is_file():
            self._raw_cache = {}
            return self._raw_cache
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError([f"cannot parse {path}: {e}"])
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError([f"{path} must contain a mapping at the top level"])
        self._raw_cache = data
        return self._raw_cache

    def save_raw(self, data: dict):
        """Write skiff.yaml."""
        self.project_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        self._raw_cache = data

    # ── Context ──────────────────────────────────────────────────────

    def load_context(self) -> ComposeContext:
        """Return the resolved ComposeContext for this project."""
        return context_from_dict(self.load_raw(), current_directory=str(self.project_dir))

    def save_context(self, context: ComposeContext):
        self.save_raw(context_to_dict(context))

    # ── Cache paths ──────────────────────────────────────────────────

    def cache_dir(self, context: Optional[ComposeContext] = None) -> Path:
        """Resolve the cache root: explicit arg, env var, config key, default."""
        if self._cache_dir is not None:
            return self._cache_dir
        env_dir = os.environ.get(CACHE_DIR_ENV, "").strip()
        if env_dir:
            return Path(env_dir).expanduser()
        if context is not None and context.cache_directory:
            path = Path(context.cache_directory).expanduser()
            if not path.is_absolute():
                path = self.project_dir / path
            return path
        return CACHE_DIR

    def project_key(self) -> str:
        """Short stable key naming this project inside the shared cache."""
        resolved = str(self.project_dir.resolve())
        digest = hashlib.sha256(resolved.encode("utf-8")).hexdigest()[:16]
        name = "".join(
            c if c.isalnum() or c in "._-" else "-"
            for c in self.project_dir.resolve().name
        ).strip(".-") or "project"
        return f"{name}-{digest}"

    def fingerprint_dir(self, context: Optional[ComposeContext] = None) -> Path:
        """Return the directory holding this project's fingerprint records."""
        return self.cache_dir(context) / "fingerprints" / self.project_key()
