# SPDX-License-Identifier: BUSL-1.1
"""Configuration system — skiff.yaml loading and validation."""

from skiff.config.resources import ComposeContext, DEFAULT_COMPOSE_FILES
from skiff.config.loader import ConfigStore
from skiff.config.validation import (
    validate_context, validate_fingerprint_inputs, ConfigurationError,
)

__all__ = [
    "ComposeContext", "DEFAULT_COMPOSE_FILES", "ConfigStore",
    "validate_context", "validate_fingerprint_inputs", "ConfigurationError",
]
