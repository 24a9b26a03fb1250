# SPDX-License-Identifier: BUSL-1.1
"""skiff compose — run any docker compose command after the build check."""

from skiff.config import ConfigurationError
from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args
from skiff.utils import die


def cmd_compose(args):
    command = list(getattr(args, "cmd", []) or [])
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        die("Provide docker compose arguments, e.g. skiff compose -- ps")

    rt = runtime_for_args(args)
    try:
        rt.compose.compose(command, timeout=getattr(args, "timeout", None))
    except (ConfigurationError, CommandError) as e:
        report_error(e)
