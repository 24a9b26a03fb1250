# SPDX-License-Identifier: BUSL-1.1
"""CLI argument parsing and command dispatch."""

import argparse
import sys

from skiff import __version__


def _add_remainder(parser, help_text: str):
    parser.add_argument("cmd", nargs=argparse.REMAINDER, help=help_text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skiff",
        description="Skiff - docker compose helper with build avoidance",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("-C", "--directory",
                        help="Project directory containing skiff.yaml (default: current directory)")
    sub = parser.add_subparsers(dest="command")

    # init
    p_init = sub.add_parser("init", help="Write a starter skiff.yaml")
    p_init.add_argument("--force", action="store_true",
                        help="Overwrite an existing skiff.yaml")

    # config
    sub.add_parser("config", help="Show the resolved project configuration")

    # fingerprint
    p_fp = sub.add_parser("fingerprint", help="Show the current build fingerprint")
    p_fp.add_argument("-v", "--verbose", action="store_true",
                      help="Also list the fingerprint inputs")

    # forget
    p_forget = sub.add_parser("forget", help="Forget fingerprint records so the next command rebuilds")
    p_forget.add_argument("--all", action="store_true",
                          help="Forget every record for this project, not just the current one")
    p_forget.add_argument("--yes", action="store_true", help="Skip confirmation prompt")

    # build
    p_build = sub.add_parser("build", help="Build compose images if their inputs changed")
    p_build.add_argument("--force", action="store_true",
                         help="Build even when the fingerprint is already recorded")
    p_build.add_argument("-q", "--quiet", action="store_true",
                         help="Hide build output unless the build fails")

    # up
    p_up = sub.add_parser("up", help="Start all containers, or one")
    p_up.add_argument("container", nargs="?", help="Service to start (default: all)")
    p_up.add_argument("-d", "--detach", action="store_true",
                      help="Run in the background instead of attaching")
    p_up.add_argument("-q", "--quiet", action="store_true",
                      help="Hide docker compose output in detached mode")

    # logs
    p_logs = sub.add_parser("logs", help="Follow container logs")
    p_logs.add_argument("container", nargs="?", help="Service to follow (default: all)")

    # wait
    p_wait = sub.add_parser("wait", help="Wait for a container to be healthy, starting it if needed")
    p_wait.add_argument("container", help="Service to wait for")
    p_wait.add_argument("--timeout", type=float, default=60,
                        help="Seconds to wait before giving up (default: 60)")

    # run
    p_run = sub.add_parser(
        "run",
        help="Run a command in a service: exec when it is running, run otherwise",
    )
    p_run.add_argument("container", help="Service to run the command in")
    p_run.add_argument("-o", "--option", action="append", default=[],
                       help="Option passed to exec/run, e.g. --option=-T (repeatable)")
    p_run.add_argument("--timeout", type=float, default=None,
                       help="Seconds before the command is aborted (default: none)")
    _add_remainder(p_run, "Command to run (after --)")

    # shell
    p_shell = sub.add_parser("shell", help="Open a shell in a one-off container")
    p_shell.add_argument("container", help="Service to open the shell in")
    p_shell.add_argument("--shell", default="bash", help="Shell to start (default: bash)")

    # compose
    p_compose = sub.add_parser("compose", help="Run any docker compose command after the build check")
    p_compose.add_argument("--timeout", type=float, default=None,
                           help="Seconds before the command is aborted (default: none)")
    _add_remainder(p_compose, "docker compose arguments (after --)")

    # image
    p_image = sub.add_parser("image", help="Build a standalone image with docker build")
    p_image.add_argument("path", help="Build context directory")
    p_image.add_argument("-t", "--tag", required=True, help="Image tag")
    p_image.add_argument("--build-arg", action="append", default=[], metavar="KEY=VALUE",
                         help="Build argument (repeatable)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Lazy import commands to keep startup fast
    from skiff.commands import (
        cmd_init, cmd_config, cmd_fingerprint, cmd_forget, cmd_build,
        cmd_up, cmd_logs, cmd_wait, cmd_run, cmd_shell, cmd_compose,
        cmd_image,
    )

    commands = {
        "init": cmd_init,
        "config": cmd_config,
        "fingerprint": cmd_fingerprint,
        "forget": cmd_forget,
        "build": cmd_build,
        "up": cmd_up,
        "logs": cmd_logs,
        "wait": cmd_wait,
        "run": cmd_run,
        "shell": cmd_shell,
        "compose": cmd_compose,
        "image": cmd_image,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
