# SPDX-License-Identifier: BUSL-1.1
"""skiff logs — follow container logs."""

from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args


def cmd_logs(args):
    rt = runtime_for_args(args)
    try:
        rt.lifecycle.logs(getattr(args, "container", None) or None)
    except CommandError as e:
        report_error(e)
    except KeyboardInterrupt:
        print()
