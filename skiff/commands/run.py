# SPDX-License-Identifier: BUSL-1.1
"""skiff run — exec in a running container, or run a one-off one."""

from skiff.config import ConfigurationError
from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args
from skiff.utils import die


def _strip_separator(command: list) -> list:
    if command and command[0] == "--":
        return command[1:]
    return command


def cmd_run(args):
    command = _strip_separator(list(getattr(args, "cmd", []) or []))
    if not command:
        die("Provide a command to run, e.g. skiff run web -- ls -la")

    rt = runtime_for_args(args)
    timeout = getattr(args, "timeout", None)
    try:
        rt.dispatcher.run_or_exec(
            args.container,
            command,
            options=tuple(getattr(args, "option", []) or []),
            timeout=timeout,
        )
    except (ConfigurationError, CommandError) as e:
        report_error(e)
