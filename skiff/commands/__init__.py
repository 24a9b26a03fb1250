# SPDX-License-Identifier: BUSL-1.1
"""Command implementations for skiff CLI."""

from skiff.commands.init import cmd_init
from skiff.commands.config_cmd import cmd_config
from skiff.commands.fingerprint_cmd import cmd_fingerprint
from skiff.commands.forget import cmd_forget
from skiff.commands.build import cmd_build
from skiff.commands.up import cmd_up
from skiff.commands.logs import cmd_logs
from skiff.commands.wait import cmd_wait
from skiff.commands.run import cmd_run
from skiff.commands.shell import cmd_shell
from skiff.commands.compose_cmd import cmd_compose
from skiff.commands.image import cmd_image
__all__ = [
    "cmd_init", "cmd_config", "cmd_fingerprint", "cmd_forget", "cmd_build",
    "cmd_up", "cmd_logs", "cmd_wait", "cmd_run", "cmd_shell", "cmd_compose",
    "cmd_image",
]
