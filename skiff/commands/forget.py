# SPDX-License-Identifier: BUSL-1.1
"""skiff forget — drop fingerprint records so the next command rebuilds."""

from skiff.config import ConfigurationError
from skiff.runtime import report_error, runtime_for_args
from skiff.utils import confirm


def cmd_forget(args):
    rt = runtime_for_args(args)

    if getattr(args, "all", False):
        records = rt.fingerprints.records()
        if not records:
            print("No fingerprint records.")
            return
        if not getattr(args, "yes", False) and not confirm(
            f"Forget all {len(records)} fingerprint record(s)?"
        ):
            return
        removed = rt.fingerprints.forget()
        print(f"Removed {removed} fingerprint record(s).")
        return

    try:
        fingerprint = rt.gate.current()
    except ConfigurationError as e:
        report_error(e)
    if rt.fingerprints.forget(fingerprint):
        print(f"Forgot fingerprint {fingerprint[:12]}; the next compose command rebuilds.")
    else:
        print(f"Fingerprint {fingerprint[:12]} was not recorded.")
