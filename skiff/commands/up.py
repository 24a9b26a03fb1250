# SPDX-License-Identifier: BUSL-1.1
"""skiff up — start all containers or one, attached or detached."""

from skiff.config import ConfigurationError
from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args


def cmd_up(args):
    rt = runtime_for_args(args)
    container = getattr(args, "container", None) or None
    detached = bool(getattr(args, "detach", False))

    try:
        rt.lifecycle.up(
            container=container,
            detached=detached,
            quiet=bool(getattr(args, "quiet", False)),
        )
    except (ConfigurationError, CommandError) as e:
        report_error(e)

    if detached:
        target = f"'{container}'" if container else "all containers"
        print(f"Started {target} in the background.")
