from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Protocol, TypeVar

T = TypeVar("T")

ESCAPE_TIMEOUT = 0.05


@dataclass(frozen=True, slots=True)
class SelectorOption[T]:
    value: T
    label: str


@dataclass(frozen=True, slots=True)
class SelectorResult[T]:
    action: Literal["select", "cancel"]
    value: T | None
    query: str = ""


class Selector(Protocol):
    def __call__(
        self, *, title: str, options: list[SelectorOption[str]]
    ) -> SelectorResult[str]: ...


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _match_score(query: str, label: str) -> tuple[int, int] | None:
    """Score a case-insensitive subsequence match; None if `query` does not match.

    Lower is better: (gaps between matched characters, start offset).
    """
    if not query:
        return (0, 0)
    q = query.lower()
    text = label.lower()

    # Prefer a contiguous occurrence.
    pos = text.find(q)
    if pos >= 0:
        return (0, pos)

    start = -1
    gaps = 0
    cursor = 0
    for ch in q:
        found = text.find(ch, cursor)
        if found < 0:
            return None
        if start < 0:
            start = found
        else:
            gaps += found - cursor
        cursor = found + 1
    return (1 + gaps, start)


def fuzzy_filter[T](query: str, options: Sequence[SelectorOption[T]]) -> list[SelectorOption[T]]:
    """Keep options whose label contains `query` as a subsequence, best first.

    Ties keep their original order.
    """
    scored: list[tuple[tuple[int, int], int, SelectorOption[T]]] = []
    for i, opt in enumerate(options):
        score = _match_score(query.strip(), opt.label)
        if score is not None:
            scored.append((score, i, opt))
    scored.sort(key=lambda item: (item[0], item[1]))
    return [opt for _, _, opt in scored]


def _read_key() -> str:
    """Read one key press as "enter", "back", "up", "down", "cancel" or a character."""
    if os.name == "nt":
        import msvcrt

        ch = msvcrt.getwch()
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("\x08", "\x7f"):
            return "back"
        if ch in ("\x1b", "\x03"):
            return "cancel"
        if ch in ("\x00", "\xe0"):
            ch2 = msvcrt.getwch()
            if ch2 == "H":
                return "up"
            if ch2 == "P":
                return "down"
            return "other"
        return ch if ch.isprintable() else "other"

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = _read_char(fd)
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("\x08", "\x7f"):
            return "back"
        if ch == "\x03":
            return "cancel"
        if ch == "\x1b":
            # A lone Esc has nothing queued behind it.
            if not _input_pending(fd, ESCAPE_TIMEOUT):
                return "cancel"
            c2 = _read_char(fd)
            if c2 == "[":
                c3 = _read_char(fd)
                if c3 == "A":
                    return "up"
                if c3 == "B":
                    return "down"
                return "other"
            return "cancel"
        return ch if ch.isprintable() else "other"
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _input_pending(fd: int, timeout: float) -> bool:
    import select

    readable, _, _ = select.select([fd], [], [], timeout)
    return bool(readable)


def _read_char(fd: int) -> str:
    """Read one UTF-8 character straight from `fd`, bypassing stdin buffering."""
    data = os.read(fd, 1)
    if data and data[0] >= 0xC0:
        extra = 1 if data[0] < 0xE0 else 2 if data[0] < 0xF0 else 3
        data += os.read(fd, extra)
    return data.decode("utf-8", errors="replace")


def _visible_rows() -> int:
    # Half the terminal, leaving room for the prompt and counters.
    return max(5, shutil.get_terminal_size((100, 30)).lines // 2 - 3)


def _render(
    *, title: str, query: str, matches: list[SelectorOption[object]], total: int, index: int
) -> None:
    sys.stdout.write("\x1b[2J\x1b[H")
    rows = _visible_rows()
    first = max(0, index - rows + 1)

    for i, opt in enumerate(matches[first : first + rows], start=first):
        if i == index:
            print(_paint(f"> {opt.label}", "1", "30", "46"))
        else:
            print(f"  {opt.label}")
    print(_paint(f"  {len(matches)}/{total}", "2", "37"))
    sys.stdout.write(_paint(title, "1", "96") + query)
    sys.stdout.flush()


def fuzzy_select[T](*, title: str, options: list[SelectorOption[T]]) -> SelectorResult[T]:
    """Let the user type to filter `options` and pick one.

    Raises:
        ValueError: If there are no options.
        RuntimeError: If stdin/stdout is not a terminal.
    """
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    query = ""
    idx = 0

    try:
        while True:
            matches = fuzzy_filter(query, options)
            idx = max(0, min(idx, len(matches) - 1))
            casted: list[SelectorOption[object]] = [
                SelectorOption(value=o.value, label=o.label) for o in matches
            ]
            _render(title=title, query=query, matches=casted, total=len(options), index=idx)
            key = _read_key()

            if key == "up":
                idx = max(0, idx - 1)
            elif key == "down":
                idx = min(len(matches) - 1, idx + 1)
            elif key == "back":
                query = query[:-1]
                idx = 0
            elif key == "enter":
                if not matches:
                    return SelectorResult(action="cancel", value=None, query=query)
                return SelectorResult(action="select", value=matches[idx].value, query=query)
            elif key == "cancel":
                return SelectorResult(action="cancel", value=None, query=query)
            elif len(key) == 1:
                query += key
                idx = 0
    finally:
        sys.stdout.write("\x1b[2J\x1b[H")
        sys.stdout.flush()
