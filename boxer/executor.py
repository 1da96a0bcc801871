"""Run operating system commands on behalf of the effects."""
from __future__ import annotations

import subprocess
from typing import Callable, Optional, Sequence

from boxer.services.scheduler import EffectError

OSASCRIPT_PATH = "/usr/bin/osascript"

CommandExecutor = Callable[[str, Sequence[str], Optional[str]], str]


class CommandExecutionError(EffectError):
    """Raised when a command cannot be started or exits with a failure."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


def run_command(path: str, args: Sequence[str] = (), stdin: Optional[str] = None) -> str:
    """Execute ``path`` with ``args``, feeding ``stdin``, and return its output.

    Standard error is merged into the returned output so failures carry the
    message printed by the command.
    """

    try:
        proc = subprocess.run(
            [path, *args],
            input=stdin if stdin is not None else "",
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise CommandExecutionError(f"{path}: {exc}") from exc
    if proc.returncode != 0:
        output = proc.stdout.strip()
        raise CommandExecutionError(output or f"{path} exited with status {proc.returncode}", proc.stdout)
    return proc.stdout


def run_osascript(executor: CommandExecutor, source: str) -> str:
    """Feed AppleScript ``source`` to ``osascript`` through ``executor``."""

    return executor(OSASCRIPT_PATH, (), source.strip())


__all__ = ["CommandExecutionError", "CommandExecutor", "OSASCRIPT_PATH", "run_command", "run_osascript"]
