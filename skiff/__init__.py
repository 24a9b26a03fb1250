# SPDX-License-Identifier: BUSL-1.1
"""Skiff - docker compose helper with build avoidance."""

__version__ = "0.1.0"
