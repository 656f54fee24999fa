"""Command dispatch.

`dispatch()` maps a descriptor to its handler. Structured commands and
fuzzy-search selections both end up here, so the two entry paths share every
handler. `run_descriptor()` is the only place a failure becomes an exit code.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import typer

from fyre.cli.context import CLIContext
from fyre.cli.registry import (
    CommandDescriptor,
    CommandKind,
    help_rows,
    menu_lines,
    parse_selection,
    spec_for,
)
from fyre.cli.selector import SelectorOption
from fyre.core.errors import FyreError
from fyre.core.project import Project, detect_project
from fyre.core.result import Err, Ok, Result
from fyre.output.console import Style
from fyre.output.errors import exit_code_for, print_error
from fyre.services.pipeline import PipelineRunner, Step
from fyre.services.version import bump_file, parse_bump_kind
from fyre.services.workflows import (
    GenerateKind,
    clean_steps,
    fix_steps,
    generate_steps,
    release_steps,
    service_url,
    watch_steps,
)

__all__ = ["HANDLERS", "Invocation", "dispatch", "run_descriptor"]

PROGRAM_NAME = "f"
SEARCH_PROMPT = "Select command: "


@dataclass(frozen=True, slots=True)
class Invocation:
    """Everything a handler receives."""

    descriptor: CommandDescriptor
    context: CLIContext
    project: Project | None

    @property
    def argument(self) -> str:
        return self.descriptor.argument or ""

    def require_project(self) -> Project:
        if self.project is None:
            raise RuntimeError(f"{self.descriptor.name} requires a project")
        return self.project


type Handler = Callable[[Invocation], Result[None, FyreError]]


def _execute(inv: Invocation, steps: list[Step]) -> Result[None, FyreError]:
    return PipelineRunner(inv.context.console, inv.context.runner).execute(steps)


def _handle_clean(inv: Invocation) -> Result[None, FyreError]:
    return _execute(inv, clean_steps())


def _handle_fix(inv: Invocation) -> Result[None, FyreError]:
    return _execute(inv, fix_steps())


def _handle_generate(inv: Invocation) -> Result[None, FyreError]:
    try:
        kind = GenerateKind(inv.argument)
    except ValueError:
        return Err(
            FyreError(
                kind="invalid_argument",
                message=f"Unknown generate type: {inv.argument}",
                hint="Please use 'swagger', 'icon' or 'assets'",
            )
        )
    return _execute(inv, generate_steps(kind))


def _handle_watch(inv: Invocation) -> Result[None, FyreError]:
    return _execute(inv, watch_steps())


def _handle_release(inv: Invocation) -> Result[None, FyreError]:
    steps = release_steps(inv.argument)
    if steps is None:
        inv.context.console.print(f"Not ready for {inv.argument} yet", Style.WARNING)
        return Ok(None)
    return _execute(inv, steps)


def _handle_open(inv: Invocation) -> Result[None, FyreError]:
    console = inv.context.console
    url = service_url(inv.argument)
    if url is None:
        console.print(f"Don't recognise the service: {inv.argument}")
        return Ok(None)

    console.print(f"Opening {url}", Style.DIM)
    if not inv.context.opener(url):
        return Err(FyreError(kind="io_error", message=f"Failed to open URL: {url}"))
    return Ok(None)


def _handle_bump(inv: Invocation) -> Result[None, FyreError]:
    kind = parse_bump_kind(inv.argument)
    if isinstance(kind, Err):
        return kind

    outcome = bump_file(inv.require_project().pubspec_path, kind.value)
    if isinstance(outcome, Err):
        return outcome

    console = inv.context.console
    console.newline()
    console.print(f"from: {outcome.value.old}", Style.OLD_VALUE)
    console.print(f"to:   {outcome.value.new}", Style.NEW_VALUE)
    return Ok(None)


def _handle_help(inv: Invocation) -> Result[None, FyreError]:
    inv.context.console.table(("Command", "Description"), help_rows(PROGRAM_NAME))
    return Ok(None)


def _handle_search(inv: Invocation) -> Result[None, FyreError]:
    ctx = inv.context
    options = [SelectorOption(value=line, label=line) for line in menu_lines()]
    try:
        chosen = ctx.select(title=SEARCH_PROMPT, options=options)
    except RuntimeError as e:
        return Err(FyreError(kind="invalid_argument", message=f"search unavailable: {e}"))
    except KeyboardInterrupt:
        return Ok(None)

    if chosen.action != "select" or not chosen.value:
        return Ok(None)

    descriptor = parse_selection(chosen.value)
    if descriptor is None:
        ctx.console.print("Command not implemented in fuzzy search")
        return Ok(None)

    ctx.console.print(f"Executing: {descriptor.label}", Style.SUCCESS)
    return dispatch(descriptor, ctx)


HANDLERS: dict[CommandKind, Handler] = {
    CommandKind.CLEAN: _handle_clean,
    CommandKind.FIX: _handle_fix,
    CommandKind.GENERATE: _handle_generate,
    CommandKind.WATCH: _handle_watch,
    CommandKind.OPEN: _handle_open,
    CommandKind.RELEASE: _handle_release,
    CommandKind.BUMP: _handle_bump,
    CommandKind.SEARCH: _handle_search,
    CommandKind.HELP: _handle_help,
}


def dispatch(descriptor: CommandDescriptor, ctx: CLIContext) -> Result[None, FyreError]:
    """Run the handler for `descriptor`, after the project guard when it applies."""
    project: Project | None = None

    if spec_for(descriptor.kind).project_scoped:
        detected = detect_project()
        if isinstance(detected, Err):
            return detected
        project = detected.value

    inv = Invocation(descriptor=descriptor, context=ctx, project=project)
    return HANDLERS[descriptor.kind](inv)


def run_descriptor(descriptor: CommandDescriptor, ctx: CLIContext) -> None:
    """Dispatch and turn a failure into a process exit."""
    result = dispatch(descriptor, ctx)
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=exit_code_for(result.error))
