"""Subprocess execution with Result-based error handling.

Children inherit the terminal: stdin, stdout and stderr are not captured,
so tools that prompt (pod, fastlane) work as if launched by hand.

Usage:
    result = run_streaming(split_command("flutter pub get"))
    match result:
        case Ok(_):
            pass
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fyre.core.result import Err, Ok, Result

__all__ = [
    "INTERRUPTED_EXIT_CODE",
    "CommandRunner",
    "ProcessError",
    "run_streaming",
    "split_command",
]

INTERRUPTED_EXIT_CODE = 130


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 when it could not be launched.
        reason: Launch error text (empty when the process ran and failed).
    """

    command: tuple[str, ...]
    returncode: int
    reason: str = ""

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    def __str__(self) -> str:
        if self.returncode == -1:
            return f"{self.command_line} could not be started ({self.reason})"
        return f"{self.command_line} failed (exit {self.returncode})"


class CommandRunner(Protocol):
    """Anything that can run a tokenized command to completion."""

    def __call__(self, cmd: list[str], cwd: Path | None = None) -> Result[None, ProcessError]: ...


def split_command(line: str) -> list[str]:
    """Tokenize a command line on whitespace. No quoting or shell syntax."""
    return line.split()


def run_streaming(cmd: list[str], cwd: Path | None = None) -> Result[None, ProcessError]:
    """Execute a command with output streamed to the terminal.

    Args:
        cmd: Command and arguments. An empty list is a no-op success.
        cwd: Working directory (current directory if None).

    Returns:
        Ok(None) if the command exited with status 0, Err(ProcessError) otherwise.
    """
    if not cmd:
        return Ok(None)

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, reason=str(e)))
    except KeyboardInterrupt:
        # The child got the same SIGINT; surface it like a shell would.
        return Err(ProcessError(command=tuple(cmd), returncode=INTERRUPTED_EXIT_CODE))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
