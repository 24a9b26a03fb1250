# SPDX-License-Identifier: BUSL-1.1
"""skiff build — build compose images when their inputs changed."""

from skiff.config import ConfigurationError
from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args


def cmd_build(args):
    rt = runtime_for_args(args)
    force = bool(getattr(args, "force", False))
    quiet = bool(getattr(args, "quiet", False))

    try:
        fingerprint = rt.gate.current()
        if not force and rt.fingerprints.exists(fingerprint):
            print(f"Images are up to date (fingerprint {fingerprint[:12]}).")
            return
        print("Building compose images...")
        print(f"  Project:     {rt.context.current_directory}")
        print(f"  Compose:     {' '.join(rt.context.compose_files) or '(docker defaults)'}")
        print(f"  Fingerprint: {fingerprint[:12]}")
        print()
        rt.compose.ensure_built(force=force, quiet=quiet)
    except (ConfigurationError, CommandError) as e:
        report_error(e)

    print("\nBuild complete.")
