# SPDX-License-Identifier: BUSL-1.1
"""Build avoidance — content fingerprints, the record store, and the build gate."""

import hashlib
import os
import string
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from skiff.config.validation import ConfigurationError, validate_fingerprint_inputs
from skiff.process import BuildError

FINGERPRINT_VERSION = "v1"
RECORD_SUFFIX = ".built"


# ── Hashing ──────────────────────────────────────────────────────────────

class ContentHasher:
    """Running SHA-256 over marked chunks of bytes.

    Each chunk is framed by a marker so that moving bytes between files (or
    renaming a file) changes the digest.
    """

    def __init__(self):
        self._hasher = hashlib.sha256()
        self.write("version", FINGERPRINT_VERSION)

    def write(self, marker: str, value):
        self._hasher.update(marker.encode("utf-8"))
        self._hasher.update(b"\0")
        if isinstance(value, str):
            self._hasher.update(value.encode("utf-8"))
        else:
            self._hasher.update(value)
        self._hasher.update(b"\0")

    def write_file(self, path: Path, relative: str):
        """Fold one file's content bytes in, keyed by its relative path."""
        self.write(f"file:{relative}", Path(path).read_bytes())

    def write_directory(self, path: Path, relative: str, pattern: str = "*"):
        """Fold every matching file below path in, in sorted path order."""
        for rel, file_path in expand_directory(Path(path), pattern):
            self.write(f"file:{relative}/{rel}", file_path.read_bytes())

    def finish(self) -> str:
        return self._hasher.hexdigest()


def expand_directory(directory: Path, pattern: str = "*") -> list:
    """Return (posix relative path, Path) for files under directory, sorted.

    Hidden files and anything inside hidden directories (.git, .svn, ...)
    are skipped.
    """
    entries = []
    for p in directory.rglob(pattern):
        if not p.is_file():
            continue
        rel = p.relative_to(directory)
        if any(part.startswith(".") for part in rel.parts):
            continue
        entries.append((rel.as_posix(), p))
    entries.sort(key=lambda entry: entry[0])
    return entries


def compute_fingerprint(context, hasher: Optional[ContentHasher] = None) -> str:
    """Compute the fingerprint of every file that influences the image build.

    Raises ConfigurationError before hashing anything when a declared input
    is missing, so a missing file never hashes like an empty one. An input
    that cannot be read while hashing (permissions, removed mid-walk) is a
    ConfigurationError too, and no fingerprint is returned.
    """
    validate_fingerprint_inputs(context).raise_if_invalid()

    hasher = hasher or ContentHasher()
    rel = None
    try:
        for rel in context.fingerprint_files:
            hasher.write_file(context.resolve(rel), rel)
        for rel in context.fingerprint_directories:
            hasher.write_directory(context.resolve(rel), rel.rstrip("/"))
    except OSError as e:
        target = e.filename or rel
        raise ConfigurationError(
            [f"cannot read fingerprint input '{target}': {e.strerror or e}"]
        ) from e
    return hasher.finish()


# ── Record store ─────────────────────────────────────────────────────────

class FingerprintStore:
    """Remembers which fingerprints have already been built.

    One empty-ish marker file per fingerprint. Records are never rewritten in
    place and stale ones are only removed by forget().
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _record_path(self, fingerprint: str) -> Path:
        fp = (fingerprint or "").strip()
        if not fp or any(c not in string.hexdigits for c in fp):
            raise ValueError(f"Invalid fingerprint: {fingerprint!r}")
        return self.root / f"{fp.lower()}{RECORD_SUFFIX}"

    def exists(self, fingerprint: str) -> bool:
        return self._record_path(fingerprint).is_file()

    def save(self, fingerprint: str):
        """Record a fingerprint as built. Saving twice is harmless."""
        path = self._record_path(fingerprint)
        self.root.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat()
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=".record-")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(stamp + "\n")
            os.replace(tmp, path)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

    def records(self) -> list:
        """List recorded fingerprints in name order."""
        if not self.root.is_dir():
            return []
        return sorted(
            p.name[: -len(RECORD_SUFFIX)]
            for p in self.root.glob(f"*{RECORD_SUFFIX}")
        )

    def forget(self, fingerprint: Optional[str] = None) -> int:
        """Delete one record (or all of them). Returns the number removed."""
        if fingerprint is not None:
            path = self._record_path(fingerprint)
            if path.exists():
                path.unlink()
                return 1
            return 0
        removed = 0
        for fp in self.records():
            (self.root / f"{fp}{RECORD_SUFFIX}").unlink()
            removed += 1
        return removed


# ── Gate ─────────────────────────────────────────────────────────────────

class BuildGate:
    """Runs the build only when the current fingerprint has not been built."""

    def __init__(self, context, store: FingerprintStore):
        self.context = context
        self.store = store

    def current(self) -> str:
        return compute_fingerprint(self.context)

    def is_satisfied(self) -> bool:
        return self.store.exists(self.current())

    def ensure_built(self, build_fn: Callable[[], object], force: bool = False) -> bool:
        """Build if needed. Returns True when build_fn ran.

        The fingerprint is saved only after build_fn returns successfully;
        an exception (or an explicit False) leaves the store untouched.
        """
        fingerprint = self.current()
        if not force and self.store.exists(fingerprint):
            return False
        if build_fn() is False:
            raise BuildError(["build"], 1, reason="reported failure")
        self.store.save(fingerprint)
        return True
