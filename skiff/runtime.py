# SPDX-License-Identifier: BUSL-1.1
"""Wire the components for one project directory."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from skiff.config import ComposeContext, ConfigStore, ConfigurationError, validate_context
from skiff.docker import Compose
from skiff.fingerprint import BuildGate, FingerprintStore
from skiff.lifecycle import CommandDispatcher, ContainerLifecycleManager
from skiff.process import CommandError, ProcessExecutor
from skiff.utils import die, note


@dataclass
class Runtime:
    store: ConfigStore
    context: ComposeContext
    executor: ProcessExecutor
    fingerprints: FingerprintStore
    gate: BuildGate
    compose: Compose
    lifecycle: ContainerLifecycleManager
    dispatcher: CommandDispatcher


def load_runtime(
    project_dir: Optional[Path] = None,
    store: Optional[ConfigStore] = None,
    executor: Optional[ProcessExecutor] = None,
    notify=note,
) -> Runtime:
    """Load skiff.yaml and build the component graph.

    Raises ConfigurationError when the context is malformed. Missing
    fingerprint inputs are reported later, when a fingerprint is computed.
    """
    store = store or ConfigStore(project_dir=project_dir)
    context = store.load_context()
    validate_context(context).raise_if_invalid()

    executor = executor or ProcessExecutor()
    fingerprints = FingerprintStore(store.fingerprint_dir(context))
    gate = BuildGate(context, fingerprints)
    compose = Compose(context, executor, gate)
    return Runtime(
        store=store,
        context=context,
        executor=executor,
        fingerprints=fingerprints,
        gate=gate,
        compose=compose,
        lifecycle=ContainerLifecycleManager(compose, notify=notify),
        dispatcher=CommandDispatcher(compose),
    )


def runtime_for_args(args) -> Runtime:
    """Load the runtime for a CLI invocation, exiting on configuration errors."""
    directory = getattr(args, "directory", None)
    try:
        return load_runtime(Path(directory) if directory else None)
    except ConfigurationError as e:
        report_error(e)


def report_error(e: Exception):
    """Print a configuration or command failure and exit."""
    if isinstance(e, ConfigurationError):
        print("Configuration is invalid:")
        for msg in e.errors:
            print(f"  x {msg}")
        die("fix skiff.yaml or run 'skiff config' for details.")
    if isinstance(e, CommandError):
        code = e.returncode if e.returncode > 0 else 1
        die(str(e), code)
    raise e
