# SPDX-License-Identifier: BUSL-1.1
"""Validation of the compose configuration context.

Two kinds of checks:
1. Shape of the context (value types, project directory present)
2. Fingerprint inputs (every declared file and directory exists)
"""

from pathlib import Path


class ConfigurationError(Exception):
    """Raised when the configuration context is unusable."""
    def __init__(self, errors: list, warnings: list = None):
        self.errors = errors
        self.warnings = warnings or []
        msg = "; ".join(errors)
        super().__init__(msg)


class ValidationResult:
    """Collects errors and warnings from validation."""
    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, msg: str):
        self.errors.append(msg)

    def warn(self, msg: str):
        self.warnings.append(msg)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        if not self.valid:
            raise ConfigurationError(self.errors, self.warnings)


def _is_string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def validate_context(context) -> ValidationResult:
    """Check the shape of a ComposeContext."""
    result = ValidationResult()

    for key, value in (
        ("docker-compose-files", context.compose_files),
        ("docker-fingerprint-files", context.fingerprint_files),
        ("docker-fingerprint-directories", context.fingerprint_directories),
    ):
        if not _is_string_list(value):
            result.error(f"'{key}' must be a list of strings")

    if not isinstance(context.cache_directory, str):
        result.error("'cache-directory' must be a string")

    base = Path(context.current_directory)
    if not base.is_dir():
        result.error(f"project directory '{context.current_directory}' does not exist")

    if _is_string_list(context.compose_files) and not context.compose_files:
        result.warn("'docker-compose-files' is empty; docker compose will use its own defaults")

    if (
        _is_string_list(context.fingerprint_files)
        and _is_string_list(context.fingerprint_directories)
        and not context.fingerprint_files
        and not context.fingerprint_directories
    ):
        result.warn("no fingerprint inputs declared; images are built once and never rebuilt")

    return result


def validate_fingerprint_inputs(context) -> ValidationResult:
    """Check that every declared fingerprint input exists with the right type."""
    result = validate_context(context)
    if not result.valid:
        return result

    for rel in context.fingerprint_files:
        path = context.resolve(rel)
        if not path.exists():
            result.error(f"fingerprint file '{rel}' not found in {context.current_directory}")
        elif not path.is_file():
            result.error(f"fingerprint file '{rel}' is not a regular file")

    for rel in context.fingerprint_directories:
        path = context.resolve(rel)
        if not path.exists():
            result.error(f"fingerprint directory '{rel}' not found in {context.current_directory}")
        elif not path.is_dir():
            result.error(f"fingerprint directory '{rel}' is not a directory")

    return result
