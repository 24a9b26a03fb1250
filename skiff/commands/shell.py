# SPDX-License-Identifier: BUSL-1.1
"""skiff shell — interactive shell in a one-off container."""

from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args


def cmd_shell(args):
    rt = runtime_for_args(args)
    try:
        rt.lifecycle.shell(args.container, shell=getattr(args, "shell", "bash") or "bash")
    except CommandError as e:
        report_error(e)
