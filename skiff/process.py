# SPDX-License-Identifier: BUSL-1.1
"""Process execution: run, capture, and replace-process calls."""

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import NoReturn, Optional


class CommandError(Exception):
    """Raised when an external command fails, times out, or cannot start."""
    def __init__(self, command: list, returncode: int, output: str = "", reason: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.output = output or ""
        detail = reason or f"exited with status {returncode}"
        msg = f"'{' '.join(self.command)}' {detail}"
        tail = self.output_tail()
        if tail:
            msg += "\n" + "\n".join(f"  {line}" for line in tail)
        super().__init__(msg)

    def output_tail(self, lines: int = 12) -> list:
        """Return the last non-empty lines of captured output."""
        kept = [line.rstrip() for line in self.output.splitlines() if line.strip()]
        return kept[-lines:]


class BuildError(CommandError):
    """Raised when an image build fails. A failed build is never recorded."""


@dataclass
class ProcessResult:
    command: list
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _effective_timeout(timeout):
    # 0 and None both mean "run to completion".
    if timeout is None or timeout <= 0:
        return None
    return timeout


class ProcessExecutor:
    """Thin wrapper around subprocess so the orchestration code can be tested."""

    def run(
        self,
        command: list,
        timeout: Optional[float] = 60,
        quiet: bool = False,
        check: bool = True,
    ) -> ProcessResult:
        """Run a command to completion.

        Quiet runs capture stdout and stderr, and a failure carries the last
        lines of that output. Otherwise the child inherits the terminal so
        interactive commands (exec, run, attached up) keep their TTY. That output
        is not captured, so a failure only points back at the terminal.
        """
        cmd = [str(part) for part in command]
        try:
            if quiet:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=_effective_timeout(timeout),
                )
                output = "\n".join(part for part in [proc.stdout, proc.stderr] if part)
            else:
                proc = subprocess.run(cmd, timeout=_effective_timeout(timeout))
                output = ""
        except FileNotFoundError:
            raise CommandError(cmd, 127, reason="failed: executable not found")
        except subprocess.TimeoutExpired as e:
            partial = e.output or ""
            if isinstance(partial, bytes):
                partial = partial.decode("utf-8", errors="replace")
            raise CommandError(cmd, -1, partial, reason=f"timed out after {timeout}s")

        result = ProcessResult(command=cmd, returncode=proc.returncode, output=output)
        if check and not result.ok:
            reason = "" if quiet else f"exited with status {result.returncode} (output above)"
            raise CommandError(cmd, result.returncode, result.output, reason=reason)
        return result

    def capture(self, command: list, timeout: Optional[float] = 10) -> str:
        """Run a command quietly and return its stripped stdout."""
        cmd = [str(part) for part in command]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=_effective_timeout(timeout),
            )
        except FileNotFoundError:
            raise CommandError(cmd, 127, reason="failed: executable not found")
        except subprocess.TimeoutExpired:
            raise CommandError(cmd, -1, reason=f"timed out after {timeout}s")
        if proc.returncode != 0:
            raise CommandError(cmd, proc.returncode, proc.stderr or proc.stdout)
        return proc.stdout.strip()

    def exec_replace(self, command: list) -> NoReturn:
        """Replace this process with the given command (execvp)."""
        cmd = [str(part) for part in command]
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execvp(cmd[0], cmd)
        except FileNotFoundError:
            raise CommandError(cmd, 127, reason="failed: executable not found")
