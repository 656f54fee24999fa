"""Pipeline steps and their executor.

A workflow is a static list of steps. Paths in steps are relative to the
working directory at the moment the step runs, so steps nested in an
`InDirectory` see the directory it entered.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fyre.core.errors import FyreError
from fyre.core.result import Err, Ok, Result
from fyre.output.console import ConsoleProtocol, Style
from fyre.platform.files import working_directory
from fyre.platform.process import (
    INTERRUPTED_EXIT_CODE,
    CommandRunner,
    ProcessError,
    run_streaming,
    split_command,
)

__all__ = [
    "IfExists",
    "InDirectory",
    "Notice",
    "PipelineRunner",
    "RemoveFile",
    "Run",
    "Step",
    "process_failure",
    "run",
]


@dataclass(frozen=True, slots=True)
class Run:
    """Run one external command."""

    command: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class InDirectory:
    """Run nested steps with `path` as the working directory."""

    path: Path
    steps: tuple[Step, ...]


@dataclass(frozen=True, slots=True)
class RemoveFile:
    """Delete a file if it exists."""

    path: Path


@dataclass(frozen=True, slots=True)
class IfExists:
    """Run `then` if `path` exists, `otherwise` if it does not."""

    path: Path
    then: tuple[Step, ...]
    otherwise: tuple[Step, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class Notice:
    message: str


type Step = Run | InDirectory | RemoveFile | IfExists | Notice


def run(line: str, *extra: str) -> Run:
    """Build a Run step from a whitespace-separated command line."""
    return Run(command=(*split_command(line), *extra))


def process_failure(error: ProcessError) -> FyreError:
    """Wrap a ProcessError for presentation."""
    if error.returncode == INTERRUPTED_EXIT_CODE:
        return FyreError(kind="interrupted", message=str(error), command=error.command)
    return FyreError(
        kind="process_failed",
        message=str(error),
        hint=error.reason or None,
        command=error.command,
    )


class PipelineRunner:
    """Execute steps in order, stopping at the first failure."""

    def __init__(
        self,
        console: ConsoleProtocol,
        runner: CommandRunner = run_streaming,
    ) -> None:
        self._console = console
        self._runner = runner

    def execute(self, steps: Sequence[Step]) -> Result[None, FyreError]:
        for step in steps:
            result = self._execute_step(step)
            if isinstance(result, Err):
                return result
        return Ok(None)

    def _execute_step(self, step: Step) -> Result[None, FyreError]:
        match step:
            case Run(command=command):
                self._console.command(" ".join(command))
                result = self._runner(list(command))
                if isinstance(result, Err):
                    return Err(process_failure(result.error))
                return Ok(None)
            case InDirectory(path=path, steps=nested):
                try:
                    with working_directory(path):
                        return self.execute(nested)
                except NotADirectoryError as e:
                    return Err(FyreError(kind="missing_directory", message=str(e)))
            case RemoveFile(path=path):
                try:
                    path.unlink(missing_ok=True)
                except OSError as e:
                    return Err(FyreError(kind="io_error", message=f"failed to remove {path}: {e}"))
                return Ok(None)
            case IfExists(path=path, then=then, otherwise=otherwise):
                return self.execute(then if path.exists() else otherwise)
            case Notice(message=message):
                self._console.print(message, Style.DIM)
                return Ok(None)
