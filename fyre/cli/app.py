from __future__ import annotations

from collections.abc import Callable

import typer

from fyre import __version__
from fyre.cli.context import build_context
from fyre.cli.dispatch import run_descriptor
from fyre.cli.registry import COMMANDS, CommandDescriptor, CommandKind, CommandSpec


app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    rich_markup_mode="rich",
    help="Flutter development automation tool",
)


def _run(descriptor: CommandDescriptor) -> None:
    run_descriptor(descriptor, build_context())


def _plain_command(kind: CommandKind) -> Callable[[], None]:
    def command() -> None:
        _run(CommandDescriptor(kind))

    return command


def _argument_command(spec: CommandSpec) -> Callable[[str], None]:
    name = spec.argument or "argument"

    def command(
        argument: str = typer.Argument(..., metavar=name.upper(), help=spec.argument_help),
    ) -> None:
        _run(CommandDescriptor(spec.kind, argument))

    return command


def _choice_command(kind: CommandKind, choice: str) -> Callable[[], None]:
    def command() -> None:
        _run(CommandDescriptor(kind, choice))

    return command


def _register(spec: CommandSpec) -> None:
    if spec.choices:
        # Closed choices become nested subcommands: `generate swagger`.
        descriptions = {e.argument: e.description for e in spec.entries}
        sub = typer.Typer(no_args_is_help=True, help=spec.summary)
        for choice in spec.choices:
            sub.command(choice, help=descriptions.get(choice))(_choice_command(spec.kind, choice))
        app.add_typer(sub, name=spec.kind.value)
    elif spec.argument is not None:
        app.command(spec.kind.value, help=spec.summary)(_argument_command(spec))
    else:
        app.command(spec.kind.value, help=spec.summary)(_plain_command(spec.kind))


for _spec in COMMANDS:
    _register(_spec)


@app.command("gen", help="Alias for generate swagger (shorthand)")
def gen() -> None:
    _run(CommandDescriptor(CommandKind.GENERATE, "swagger"))


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
