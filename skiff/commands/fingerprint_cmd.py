# SPDX-License-Identifier: BUSL-1.1
"""skiff fingerprint — show the current build fingerprint and whether it is built."""

from skiff.config import ConfigurationError
from skiff.runtime import report_error, runtime_for_args


def cmd_fingerprint(args):
    rt = runtime_for_args(args)
    try:
        fingerprint = rt.gate.current()
    except ConfigurationError as e:
        report_error(e)

    built = rt.fingerprints.exists(fingerprint)
    print(fingerprint)
    if getattr(args, "verbose", False):
        print(f"  Files:       {', '.join(rt.context.fingerprint_files) or '(none)'}")
        print(f"  Directories: {', '.join(rt.context.fingerprint_directories) or '(none)'}")
        print(f"  Records:     {rt.fingerprints.root}")
    print("built" if built else "not built")
