# SPDX-License-Identifier: BUSL-1.1
"""skiff image — build a standalone image with docker build."""

from pathlib import Path

from skiff.docker import docker_build
from skiff.process import CommandError, ProcessExecutor
from skiff.runtime import report_error
from skiff.utils import die, parse_key_value


def cmd_image(args):
    path = Path(args.path).expanduser()
    if not path.is_dir():
        die(f"Build context '{args.path}' is not a directory.")
    try:
        build_args = parse_key_value(getattr(args, "build_arg", []) or [])
    except ValueError as e:
        die(f"Invalid --build-arg: {e}")

    try:
        docker_build(ProcessExecutor(), str(path), args.tag, build_args)
    except CommandError as e:
        report_error(e)
    print(f"Built image '{args.tag}'.")
