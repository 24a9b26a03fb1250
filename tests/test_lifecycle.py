# SPDX-License-Identifier: BUSL-1.1
"""Tests for container start/wait behavior and exec-or-run dispatch.

Validates:
- wait_for_healthy auto-starts a stopped container exactly once, before polling
- wait_for_healthy reports timeouts truthfully
- up always consults the build gate; attached mode replaces the process
- run_or_exec picks exec for running containers and run otherwise, per call
"""

import functools
import json
import sys
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from skiff.config import ComposeContext
from skiff.docker import Compose
from skiff.lifecycle import CommandDispatcher, ContainerLifecycleManager
from skiff.polling import wait_for
from skiff.process import BuildError, CommandError, ProcessExecutor, ProcessResult

COMPOSE = ["docker", "compose", "-f", "docker-compose.yml"]
PS = COMPOSE + ["ps", "--all", "--format", "json"]


def _ps(service, state="running", health=""):
    return json.dumps({"Service": service, "Name": f"proj-{service}-1", "State": state, "Health": health})


NOT_RUNNING = ""


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class _ComposeCase(unittest.TestCase):
    def setUp(self):
        self.executor = mock.Mock(spec=ProcessExecutor)
        self.executor.run.return_value = ProcessResult(command=[], returncode=0)
        self.gate = mock.Mock()
        self.gate.ensure_built.return_value = False
        self.compose = Compose(ComposeContext(), self.executor, self.gate)
        self.clock = FakeClock()
        self.messages = []
        self.manager = ContainerLifecycleManager(
            self.compose,
            notify=self.messages.append,
            poll=functools.partial(wait_for, sleep=self.clock.sleep, clock=self.clock),
        )

    def _run_commands(self):
        return [c.args[0] for c in self.executor.run.call_args_list]


class TestWaitForHealthy(_ComposeCase):
    def test_starts_stopped_container_before_polling(self):
        self.executor.capture.side_effect = [NOT_RUNNING, _ps("db", health="healthy")]

        self.assertTrue(self.manager.wait_for_healthy("db", timeout=30))

        self.assertEqual(self.messages, ['Starting required container "db"'])
        names = [c[0] for c in self.executor.mock_calls]
        self.assertEqual(names, ["capture", "run", "capture"])
        self.executor.run.assert_called_once_with(COMPOSE + ["up", "-d", "db"], timeout=None, quiet=True)
        self.gate.ensure_built.assert_called_once()

    def test_running_container_is_not_restarted(self):
        self.executor.capture.side_effect = [
            _ps("db", health="starting"),
            _ps("db", health="starting"),
            _ps("db", health="healthy"),
        ]
        self.assertTrue(self.manager.wait_for_healthy("db", timeout=30))
        self.assertEqual(self.messages, [])
        self.executor.run.assert_not_called()
        self.assertEqual(self.executor.capture.call_count, 3)

    def test_timeout_returns_false(self):
        self.executor.capture.return_value = _ps("db", health="unhealthy")
        self.assertFalse(self.manager.wait_for_healthy("db", timeout=5))
        self.assertLessEqual(self.clock.now, 6)

    def test_status_failures_while_polling_count_as_not_ready(self):
        self.executor.capture.side_effect = [
            _ps("db", health="starting"),
            CommandError(PS, 1, "Cannot connect to the Docker daemon"),
            _ps("db", health="healthy"),
        ]
        self.assertTrue(self.manager.wait_for_healthy("db", timeout=30))

    def test_status_failure_before_polling_propagates(self):
        self.executor.capture.side_effect = CommandError(PS, 1)
        with self.assertRaises(CommandError):
            self.manager.wait_for_healthy("db", timeout=30)

    def test_every_poll_queries_fresh_status(self):
        self.executor.capture.side_effect = [NOT_RUNNING, NOT_RUNNING, _ps("db", health="healthy")]
        self.assertTrue(self.manager.wait_for_healthy("db", timeout=30))
        self.assertEqual(self.executor.capture.call_count, 3)
        self.assertEqual(len(self.messages), 1)


class TestUp(_ComposeCase):
    def test_detached_single_container(self):
        self.manager.up("web", detached=True)
        self.gate.ensure_built.assert_called_once()
        self.executor.run.assert_called_once_with(COMPOSE + ["up", "-d", "web"], timeout=None, quiet=False)
        self.executor.exec_replace.assert_not_called()

    def test_detached_all_with_options(self):
        self.manager.up(detached=True, options=("--remove-orphans",))
        self.assertEqual(self._run_commands(), [COMPOSE + ["up", "-d", "--remove-orphans"]])

    def test_attached_replaces_process(self):
        self.manager.up("web")
        self.executor.exec_replace.assert_called_once_with(COMPOSE + ["up", "web"])
        self.executor.run.assert_not_called()

    def test_gate_runs_before_attach(self):
        calls = []
        self.gate.ensure_built.side_effect = lambda *a, **k: calls.append("gate")
        self.executor.exec_replace.side_effect = lambda *a, **k: calls.append("exec")
        self.manager.up()
        self.assertEqual(calls, ["gate", "exec"])

    def test_build_failure_stops_up(self):
        self.gate.ensure_built.side_effect = BuildError(COMPOSE + ["build"], 1)
        with self.assertRaises(BuildError):
            self.manager.up("web", detached=True)
        self.executor.run.assert_not_called()
        self.executor.exec_replace.assert_not_called()

    def test_shell_runs_one_off_container(self):
        self.manager.shell("web")
        self.executor.exec_replace.assert_called_once_with(COMPOSE + ["run", "--rm", "web", "bash"])

    def test_logs(self):
        self.manager.logs("web")
        self.assertEqual(self._run_commands(), [COMPOSE + ["logs", "-f", "web"]])


class TestCommandDispatcher(_ComposeCase):
    def setUp(self):
        super().setUp()
        self.dispatcher = CommandDispatcher(self.compose)

    def test_not_running_uses_run(self):
        self.executor.capture.return_value = NOT_RUNNING
        self.dispatcher.run_or_exec("web", ["echo", "hi"])
        self.assertEqual(self._run_commands(), [COMPOSE + ["run", "web", "echo", "hi"]])

    def test_running_unhealthy_uses_exec(self):
        self.executor.capture.return_value = _ps("web", health="unhealthy")
        self.dispatcher.run_or_exec("web", ["echo", "hi"])
        self.assertEqual(self._run_commands(), [COMPOSE + ["exec", "web", "echo", "hi"]])

    def test_paused_service_uses_exec(self):
        self.executor.capture.return_value = _ps("web", state="paused")
        self.dispatcher.run_or_exec("web", ["echo", "hi"])
        self.assertEqual(self._run_commands(), [COMPOSE + ["exec", "web", "echo", "hi"]])

    def test_restarting_service_uses_run(self):
        self.executor.capture.return_value = _ps("web", state="restarting")
        self.dispatcher.run_or_exec("web", ["echo", "hi"])
        self.assertEqual(self._run_commands(), [COMPOSE + ["run", "web", "echo", "hi"]])

    def test_options_precede_container(self):
        self.executor.capture.return_value = _ps("web", health="healthy")
        self.dispatcher.run_or_exec("web", ["php", "-v"], options=("-T", "--user=www-data"), timeout=5)
        self.executor.run.assert_called_once_with(
            COMPOSE + ["exec", "-T", "--user=www-data", "web", "php", "-v"],
            timeout=5,
            quiet=False,
        )

    def test_decision_is_made_per_call(self):
        self.executor.capture.side_effect = [_ps("web"), NOT_RUNNING]
        self.dispatcher.run_or_exec("web", ["ls"])
        self.dispatcher.run_or_exec("web", ["ls"])
        self.assertEqual(
            self._run_commands(),
            [COMPOSE + ["exec", "web", "ls"], COMPOSE + ["run", "web", "ls"]],
        )

    def test_dispatch_goes_through_build_gate(self):
        self.executor.capture.return_value = NOT_RUNNING
        self.dispatcher.run_or_exec("web", ["ls"])
        self.gate.ensure_built.assert_called_once()

    def test_command_failure_propagates(self):
        self.executor.capture.return_value = NOT_RUNNING
        self.executor.run.side_effect = CommandError(COMPOSE + ["run", "web", "false"], 1)
        with self.assertRaises(CommandError):
            self.dispatcher.run_or_exec("web", ["false"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
