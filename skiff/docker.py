# SPDX-License-Identifier: BUSL-1.1
"""Docker operations — compose commands, image builds, container state."""

import enum
import json
from typing import NoReturn, Optional

from skiff.process import BuildError, CommandError, ProcessExecutor, ProcessResult
from skiff.utils import info


class ContainerStatus(enum.Enum):
    NOT_RUNNING = "not-running"
    RUNNING_UNHEALTHY = "running-unhealthy"
    RUNNING_HEALTHY = "running-healthy"

    @property
    def running(self) -> bool:
        return self is not ContainerStatus.NOT_RUNNING

    @property
    def healthy(self) -> bool:
        return self is ContainerStatus.RUNNING_HEALTHY


# ── Status parsing ───────────────────────────────────────────────────────

def parse_ps_output(text: str) -> list:
    """Parse `docker compose ps --format json` output into records.

    Older compose releases print one JSON array, newer ones print one JSON
    object per line.
    """
    text = (text or "").strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = [json.loads(line) for line in text.splitlines() if line.strip()]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("unexpected docker compose ps output")
    return [r for r in data if isinstance(r, dict)]


# States `docker ps` reports as "Up". Restarting containers are not up.
UP_STATES = ("running", "paused")


def _matches(record: dict, container: str) -> bool:
    return container in (record.get("Service"), record.get("Name"))


def status_from_records(records: list, container: str) -> ContainerStatus:
    """Derive a ContainerStatus for one service from ps records.

    A paused container counts as running. Healthy only when every running
    replica of the service reports healthy.
    """
    running = [
        r for r in records
        if _matches(r, container) and str(r.get("State", "")).lower() in UP_STATES
    ]
    if not running:
        return ContainerStatus.NOT_RUNNING
    if all(str(r.get("Health", "")).lower() == "healthy" for r in running):
        return ContainerStatus.RUNNING_HEALTHY
    return ContainerStatus.RUNNING_UNHEALTHY


# ── Compose ──────────────────────────────────────────────────────────────

class Compose:
    """Builds and runs `docker compose` commands for one project.

    Every compose operation except status queries and logs goes through the
    build gate first, so images are rebuilt when their inputs change.
    """

    def __init__(self, context, executor: ProcessExecutor, gate=None):
        self.context = context
        self.executor = executor
        self.gate = gate

    def base_command(self) -> list:
        return ["docker", "compose", *self.context.compose_files]

    def command(self, args: list) -> list:
        return [*self.base_command(), *[str(a) for a in args]]

    # ── Build ────────────────────────────────────────────────────────

    def build(self, quiet: bool = False) -> ProcessResult:
        """Build all images. Raises BuildError on failure."""
        cmd = self.command(["build"])
        try:
            return self.executor.run(cmd, timeout=None, quiet=quiet)
        except CommandError as e:
            raise BuildError(e.command, e.returncode, e.output)

    def ensure_built(self, force: bool = False, quiet: bool = False) -> bool:
        """Build through the gate. Returns True when a build ran."""
        if self.gate is None:
            self.build(quiet=quiet)
            return True
        return self.gate.ensure_built(lambda: self.build(quiet=quiet), force=force)

    # ── Commands ─────────────────────────────────────────────────────

    def compose(self, args: list, timeout: Optional[float] = 60, quiet: bool = False) -> ProcessResult:
        """Run `docker compose <files> <args...>` after the build gate."""
        self.ensure_built()
        return self.executor.run(self.command(args), timeout=timeout, quiet=quiet)

    def exec_compose(self, args: list) -> NoReturn:
        """Replace this process with `docker compose <files> <args...>`."""
        self.executor.exec_replace(self.command(args))

    def logs(self, container: Optional[str] = None) -> ProcessResult:
        args = ["logs", "-f"]
        if container:
            args.append(container)
        return self.executor.run(self.command(args), timeout=None)

    # ── State ────────────────────────────────────────────────────────

    def ps(self) -> list:
        """Return structured ps records for every container of the project."""
        output = self.executor.capture(self.command(["ps", "--all", "--format", "json"]))
        try:
            return parse_ps_output(output)
        except ValueError as e:
            raise CommandError(self.command(["ps"]), 0, output, reason=f"returned unreadable output ({e})")

    def status(self, container: str) -> ContainerStatus:
        return status_from_records(self.ps(), str(container))


# ── Plain docker ─────────────────────────────────────────────────────────

def docker_build_command(path: str, tag: str, build_args: Optional[dict] = None) -> list:
    """Build the `docker build` argument list."""
    cmd = ["docker", "build"]
    for key, value in (build_args or {}).items():
        cmd.append(f"--build-arg={key}={value}")
    cmd.append(f"--tag={tag}")
    cmd.append(str(path))
    return cmd


def docker_build(
    executor: ProcessExecutor,
    path: str,
    tag: str,
    build_args: Optional[dict] = None,
    notify=info,
) -> ProcessResult:
    """Build a single image from a directory. Raises BuildError on failure."""
    notify(f'Building docker image "{tag}"')
    cmd = docker_build_command(path, tag, build_args)
    try:
        return executor.run(cmd, timeout=None)
    except CommandError as e:
        raise BuildError(e.command, e.returncode, e.output)
