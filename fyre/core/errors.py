"""Error codes and the shared error value.

Every failure in fyre is represented by a `FyreError` travelling inside an
`Err`. Only the CLI boundary turns it into a process exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["ErrorCode", "ErrorKind", "FyreError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success, including soft outcomes (unsupported track, cancelled search)
    - 1: Any failure (not a project, tool failed, version file unusable)
    - 2: Usage error reported by the argument parser
    - 130: A running tool was stopped with Ctrl-C
    """

    OK = 0
    FAILURE = 1
    USAGE = 2
    INTERRUPTED = 130

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


type ErrorKind = Literal[
    "not_a_project",
    "process_failed",
    "interrupted",
    "version_not_found",
    "io_error",
    "invalid_argument",
    "missing_directory",
]


@dataclass(frozen=True, slots=True)
class FyreError:
    """A terminal failure for the current invocation.

    Attributes:
        kind: Category used for presentation and exit codes.
        message: Human-readable description.
        hint: Optional follow-up advice.
        command: The failing command line (process failures only).
    """

    kind: ErrorKind
    message: str
    hint: str | None = None
    command: tuple[str, ...] | None = None
