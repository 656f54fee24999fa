"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fyre.core.errors import ErrorCode, FyreError
from fyre.output.console import Style

if TYPE_CHECKING:
    from fyre.output.console import ConsoleProtocol

__all__ = ["FAILURE_RULE", "exit_code_for", "print_error"]

FAILURE_RULE = "=" * 54


def print_error(error: FyreError, console: ConsoleProtocol) -> None:
    """Print an error to the console with formatting suited to its kind."""
    match error:
        case FyreError(kind="interrupted"):
            # Ctrl-C already ended the tool in front of the user.
            return
        case FyreError(kind="process_failed", command=command) if command is not None:
            console.newline()
            console.print(FAILURE_RULE)
            console.print(" Something went wrong while executing this:", Style.ERROR)
            console.print(f"  $ {' '.join(command)}", Style.WARNING)
            if error.hint:
                console.print(f"  {error.hint}", Style.DIM)
            console.print(FAILURE_RULE)
        case FyreError(kind="not_a_project"):
            console.print(error.message, Style.ERROR)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


def exit_code_for(error: FyreError) -> int:
    """Get the process exit code for an error.

    Usage errors never reach here because the argument parser reports them
    itself.
    """
    if error.kind == "interrupted":
        return int(ErrorCode.INTERRUPTED)
    return int(ErrorCode.FAILURE)
