# SPDX-License-Identifier: BUSL-1.1
"""Shared utilities for skiff."""

import sys


def die(msg: str, code: int = 1):
    """Print error message and exit."""
    print(f"Error: {msg}")
    sys.exit(code)


def note(msg: str):
    """Print a progress note for the operator."""
    print(f"[NOTE] {msg}")


def info(msg: str):
    print(f"[INFO] {msg}")


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question. Returns True for yes."""
    suffix = "[Y/n]" if default else "[y/N]"
    answer = input(f"{prompt} {suffix}: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def parse_key_value(items: list) -> dict:
    """Parse repeated KEY=VALUE arguments into an ordered dict.

    Raises ValueError for entries without '=' or with an empty key.
    """
    parsed = {}
    for item in items or []:
        key, sep, value = str(item).partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got '{item}'")
        parsed[key] = value
    return parsed
