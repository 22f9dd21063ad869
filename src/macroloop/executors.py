"""Executors bundled with the command line interface."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from loguru import logger
from rich.console import Console

from macroloop.core.types import StatusCode
from macroloop.errors import ExecutorError

SHELL_NOT_FOUND = 127
SHELL_NOT_EXECUTABLE = 126


class EchoExecutor:
    """Print each command and report success."""

    def __init__(self, verbose_level: int = 0, console: Console | None = None) -> None:
        self.verbose_level = verbose_level
        self.history: list[str] = []
        self._console = console or Console()

    def apply(self, command: str) -> int:
        self.history.append(command)
        self._console.print(command, markup=False, highlight=False)
        return StatusCode.SUCCEEDED


class ShellExecutor:
    """Run each command through bash and map its exit code to a status code."""

    def __init__(self, cwd: Path | None = None, verbose_level: int = 0) -> None:
        self.cwd = cwd
        self.verbose_level = verbose_level

    def apply(self, command: str) -> int:
        bash_executable = shutil.which("bash") or "bash"
        try:
            # Macro authors intentionally run shell commands here.
            result = subprocess.run(  # noqa: S603
                [bash_executable, "-lc", command],
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ExecutorError(str(exc)) from exc

        output = ((result.stdout or "") + (result.stderr or "")).strip()
        if output and self.verbose_level > 0:
            logger.info("{}", output)
        return status_from_returncode(result.returncode)


def status_from_returncode(returncode: int) -> int:
    if returncode == 0:
        return StatusCode.SUCCEEDED
    if returncode == SHELL_NOT_FOUND:
        return StatusCode.NOT_FOUND
    if returncode == SHELL_NOT_EXECUTABLE:
        return StatusCode.ILLEGAL_APPLICATION_STATE
    return StatusCode.PARAMETER_OUT_OF_RANGE + returncode % 100
