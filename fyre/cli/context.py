from __future__ import annotations

from dataclasses import dataclass

from fyre.cli.selector import Selector, fuzzy_select
from fyre.output.console import ConsoleProtocol, RichConsole
from fyre.platform.browser import UrlOpener, open_url
from fyre.platform.process import CommandRunner, run_streaming


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Capabilities a command needs from the outside world.

    Commands always act on the process working directory; tests swap the
    capabilities for recorders.
    """

    console: ConsoleProtocol
    runner: CommandRunner = run_streaming
    opener: UrlOpener = open_url
    select: Selector = fuzzy_select


def build_context() -> CLIContext:
    return CLIContext(console=RichConsole())
