"""The command table.

`COMMANDS` is the one place the command set is declared. The typer grammar,
the fuzzy-search menu, the help table and the token parser used for menu
selections are all derived from it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "COMMANDS",
    "MENU_SEPARATOR",
    "CommandDescriptor",
    "CommandKind",
    "CommandSpec",
    "MenuEntry",
    "help_rows",
    "menu_lines",
    "parse_selection",
    "parse_tokens",
    "spec_for",
]

MENU_SEPARATOR = " - "


class CommandKind(StrEnum):
    CLEAN = "clean"
    FIX = "fix"
    GENERATE = "generate"
    WATCH = "watch"
    OPEN = "open"
    RELEASE = "release"
    BUMP = "bump"
    SEARCH = "search"
    HELP = "help"


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """A resolved command: what to run and with which argument."""

    kind: CommandKind
    argument: str | None = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def label(self) -> str:
        if self.argument is None:
            return self.name
        return f"{self.name} {self.argument}"


@dataclass(frozen=True, slots=True)
class MenuEntry:
    argument: str | None
    description: str


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Declaration of one command.

    Attributes:
        kind: Command identity.
        summary: One-line help for the typer grammar.
        argument: Name of the positional argument, None if the command takes none.
        argument_help: Help text for the positional argument.
        choices: Closed set of accepted arguments (empty means free text).
        entries: Concrete invocations shown in the menu and help table.
        project_scoped: Whether the project guard applies.
        searchable: Whether entries appear in the fuzzy-search menu.
    """

    kind: CommandKind
    summary: str
    entries: tuple[MenuEntry, ...]
    argument: str | None = None
    argument_help: str | None = None
    choices: tuple[str, ...] = ()
    project_scoped: bool = True
    searchable: bool = True


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        kind=CommandKind.CLEAN,
        summary="Deep clean and rebuild the project",
        entries=(MenuEntry(None, "Deep cleans the project and rebuilds it"),),
    ),
    CommandSpec(
        kind=CommandKind.FIX,
        summary="Apply automatic fixes to Dart code",
        entries=(MenuEntry(None, "Apply automatic fixes to Dart code"),),
    ),
    CommandSpec(
        kind=CommandKind.GENERATE,
        summary="Generate code or assets",
        argument="kind",
        choices=("swagger", "icon", "assets"),
        entries=(
            MenuEntry("swagger", "Generate Swagger/OpenAPI client"),
            MenuEntry("icon", "Generate app icons"),
            MenuEntry("assets", "Generate asset definitions"),
        ),
    ),
    CommandSpec(
        kind=CommandKind.WATCH,
        summary="Watch for changes and rebuild",
        entries=(MenuEntry(None, "Watch for changes and rebuild"),),
    ),
    CommandSpec(
        kind=CommandKind.OPEN,
        summary="Open external services",
        argument="service",
        argument_help="Service to open (apple, android)",
        project_scoped=False,
        entries=(
            MenuEntry("apple", "Open App Store Connect"),
            MenuEntry("android", "Open Google Play Console"),
        ),
    ),
    CommandSpec(
        kind=CommandKind.RELEASE,
        summary="Release the app to different tracks",
        argument="track",
        argument_help="Release track (beta, production)",
        entries=(
            MenuEntry("beta", "Release to beta track"),
            MenuEntry("production", "Release to production track"),
        ),
    ),
    CommandSpec(
        kind=CommandKind.BUMP,
        summary="Bump version numbers",
        argument="component",
        argument_help="Version component to bump (major, minor, patch, build)",
        entries=(
            MenuEntry("major", "Bump major version"),
            MenuEntry("minor", "Bump minor version"),
            MenuEntry("patch", "Bump patch version"),
            MenuEntry("build", "Bump build number"),
        ),
    ),
    CommandSpec(
        kind=CommandKind.SEARCH,
        summary="Fuzzy search and execute commands",
        project_scoped=False,
        searchable=False,
        entries=(MenuEntry(None, "Fuzzy search and execute commands interactively"),),
    ),
    CommandSpec(
        kind=CommandKind.HELP,
        summary="Show a table with all the available commands",
        project_scoped=False,
        entries=(MenuEntry(None, "Show help information"),),
    ),
)

_BY_KIND = {spec.kind: spec for spec in COMMANDS}


def spec_for(kind: CommandKind) -> CommandSpec:
    return _BY_KIND[kind]


def _entry_label(spec: CommandSpec, entry: MenuEntry) -> str:
    return CommandDescriptor(spec.kind, entry.argument).label


def menu_lines() -> list[str]:
    """Lines offered by the fuzzy selector, in table order."""
    return [
        f"{_entry_label(spec, entry)}{MENU_SEPARATOR}{entry.description}"
        for spec in COMMANDS
        if spec.searchable
        for entry in spec.entries
    ]


def help_rows(program: str) -> list[tuple[str, str]]:
    """Rows for the help table, with an empty row between commands."""
    rows: list[tuple[str, str]] = []
    for spec in COMMANDS:
        if rows:
            rows.append(("", ""))
        rows.extend((f"{program} {_entry_label(spec, e)}", e.description) for e in spec.entries)
    return rows


def parse_tokens(tokens: Sequence[str]) -> CommandDescriptor | None:
    """Match tokens against the searchable commands.

    Returns None for any pattern the menu does not cover.
    """
    if not tokens:
        return None
    try:
        spec = spec_for(CommandKind(tokens[0]))
    except ValueError:
        return None
    if not spec.searchable:
        return None

    if spec.argument is None:
        return CommandDescriptor(spec.kind) if len(tokens) == 1 else None
    if len(tokens) != 2:
        return None
    if spec.choices and tokens[1] not in spec.choices:
        return None
    return CommandDescriptor(spec.kind, tokens[1])


def parse_selection(line: str) -> CommandDescriptor | None:
    """Parse a selected menu line: the part before " - ", split on whitespace."""
    command_part = line.split(MENU_SEPARATOR, 1)[0]
    return parse_tokens(command_part.split())
