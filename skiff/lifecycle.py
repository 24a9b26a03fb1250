# SPDX-License-Identifier: BUSL-1.1
"""Container lifecycle — start, wait for health, and exec-or-run dispatch."""

from typing import NoReturn, Optional

from skiff.docker import Compose, ContainerStatus
from skiff.polling import PollOutcome, wait_for
from skiff.process import CommandError, ProcessResult
from skiff.utils import note

HEALTH_POLL_INTERVAL = 1


class ContainerLifecycleManager:
    """Starts compose services and waits for them to report healthy."""

    def __init__(self, compose: Compose, notify=note, poll=wait_for):
        self.compose = compose
        self.notify = notify
        self.poll = poll

    def status(self, container: str) -> ContainerStatus:
        return self.compose.status(container)

    def is_running(self, container: str) -> bool:
        return self.status(container).running

    def is_healthy(self, container: str) -> bool:
        return self.status(container).healthy

    def up(
        self,
        container: Optional[str] = None,
        detached: bool = False,
        quiet: bool = False,
        options: tuple = (),
    ) -> Optional[ProcessResult]:
        """Start all services (or one) after making sure images are current.

        Attached mode replaces this process with `docker compose up` and
        does not return.
        """
        self.compose.ensure_built()
        args = [*options]
        if container:
            args.append(str(container))
        if not detached:
            self._attach(args)
            return None
        return self.compose.executor.run(
            self.compose.command(["up", "-d", *args]),
            timeout=None,
            quiet=quiet,
        )

    def _attach(self, args: list) -> NoReturn:
        self.compose.exec_compose(["up", *args])

    def wait_for_healthy(self, container: str, timeout: float = 60) -> bool:
        """Wait until container reports healthy, starting it if needed.

        Returns False when the timeout expires first.
        """
        if not self.is_running(container):
            self.notify(f'Starting required container "{container}"')
            self.up(container=container, detached=True, quiet=True)

        outcome = self.poll(
            lambda: self.is_healthy(container),
            timeout=timeout,
            interval=HEALTH_POLL_INTERVAL,
            errors=(CommandError,),
        )
        return outcome is PollOutcome.SATISFIED

    def logs(self, container: Optional[str] = None) -> ProcessResult:
        return self.compose.logs(container)

    def shell(self, container: str, shell: str = "bash") -> NoReturn:
        """Open an interactive shell in a one-off container (replaces process)."""
        self.compose.exec_compose(["run", "--rm", str(container), shell])


class CommandDispatcher:
    """Routes a command to `exec` when the service runs, `run` otherwise."""

    def __init__(self, compose: Compose):
        self.compose = compose

    def run_or_exec(
        self,
        container: str,
        command: list,
        options: tuple = (),
        timeout: Optional[float] = 60,
    ) -> ProcessResult:
        # Running is enough for exec; health is not required.
        if self.compose.status(container).running:
            verb = "exec"
        else:
            verb = "run"
        return self.compose.compose(
            [verb, *options, str(container), *command],
            timeout=timeout,
        )
