# SPDX-License-Identifier: BUSL-1.1
"""skiff config — show the resolved project configuration."""

import sys

from skiff.config import ConfigStore, ConfigurationError
from skiff.config.validation import validate_fingerprint_inputs


def cmd_config(args):
    store = ConfigStore(project_dir=getattr(args, "directory", None))
    try:
        context = store.load_context()
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if store.is_initialized():
        print(f"Project config ({store.config_file}):")
    else:
        print(f"Project config: (none, using defaults; run 'skiff init' to create {store.config_file.name})")
    print(f"  directory:                      {context.current_directory}")
    print(f"  docker-compose-files:           {context.compose_files}")
    print(f"  docker-fingerprint-files:       {context.fingerprint_files}")
    print(f"  docker-fingerprint-directories: {context.fingerprint_directories}")
    print(f"  cache-directory:                {store.cache_dir(context)}")
    print(f"  fingerprint records:            {store.fingerprint_dir(context)}")
    print()

    result = validate_fingerprint_inputs(context)
    if result.warnings:
        print("  Warnings:")
        for w in result.warnings:
            print(f"    ! {w}")
        print()
    if result.errors:
        print("  Errors:")
        for e in result.errors:
            print(f"    x {e}")
        print()
        print("  Result: INVALID")
        sys.exit(1)
    print("  Result: VALID")
