# SPDX-License-Identifier: BUSL-1.1
"""skiff wait — wait for a container to become healthy, starting it if needed."""

import sys

from skiff.config import ConfigurationError
from skiff.process import CommandError
from skiff.runtime import report_error, runtime_for_args


def cmd_wait(args):
    rt = runtime_for_args(args)
    container = args.container
    timeout = float(getattr(args, "timeout", 60))

    print(f'Waiting for container "{container}" to be healthy (timeout {timeout:g}s)...')
    try:
        healthy = rt.lifecycle.wait_for_healthy(container, timeout=timeout)
    except (ConfigurationError, CommandError) as e:
        report_error(e)

    if not healthy:
        print(f"Error: container '{container}' did not become healthy within {timeout:g}s.")
        sys.exit(1)
    print(f"Container '{container}' is healthy.")
