"""Version bumping for `pubspec.yaml`.

The version line has the shape `version: MAJOR.MINOR.PATCH+BUILD`. Only the
first such line is rewritten; the rest of the file is left byte-for-byte
unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from fyre.core.errors import FyreError
from fyre.core.result import Err, Ok, Result
from fyre.platform.files import atomic_write_text

__all__ = [
    "VERSION_PATTERN",
    "BumpKind",
    "BumpOutcome",
    "VersionMatch",
    "VersionTuple",
    "bump_file",
    "find_version",
    "parse_bump_kind",
    "replace_version",
]

VERSION_PATTERN = re.compile(r"version: (\d+)\.(\d+)\.(\d+)\+(\d+)")


class BumpKind(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    BUILD = "build"


@dataclass(frozen=True, slots=True, order=True)
class VersionTuple:
    major: int
    minor: int
    patch: int
    build: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}+{self.build}"

    def bump(self, kind: BumpKind) -> VersionTuple:
        """Advance one component; the build number always increments."""
        match kind:
            case BumpKind.MAJOR:
                return VersionTuple(self.major + 1, 0, 0, self.build + 1)
            case BumpKind.MINOR:
                return VersionTuple(self.major, self.minor + 1, 0, self.build + 1)
            case BumpKind.PATCH:
                return VersionTuple(self.major, self.minor, self.patch + 1, self.build + 1)
            case BumpKind.BUILD:
                return VersionTuple(self.major, self.minor, self.patch, self.build + 1)


@dataclass(frozen=True, slots=True)
class VersionMatch:
    """A version line located in a text, with its character span."""

    version: VersionTuple
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class BumpOutcome:
    path: Path
    old: VersionTuple
    new: VersionTuple


def parse_bump_kind(token: str) -> Result[BumpKind, FyreError]:
    try:
        return Ok(BumpKind(token))
    except ValueError:
        return Err(
            FyreError(
                kind="invalid_argument",
                message=f"Invalid update type: {token}",
                hint="Please use 'major', 'minor', 'patch', or 'build'",
            )
        )


def find_version(text: str, *, source: str = "pubspec.yaml") -> Result[VersionMatch, FyreError]:
    """Locate the first `version: M.m.p+b` line in `text`."""
    m = VERSION_PATTERN.search(text)
    if m is None:
        return Err(
            FyreError(
                kind="version_not_found",
                message=f"Could not find version line in {source}",
                hint="Expected a line like 'version: 1.0.0+1'",
            )
        )
    version = VersionTuple(*(int(g) for g in m.groups()))
    return Ok(VersionMatch(version=version, start=m.start(), end=m.end()))


def replace_version(text: str, match: VersionMatch, new: VersionTuple) -> str:
    """Return `text` with only the matched version line replaced."""
    return f"{text[: match.start]}version: {new}{text[match.end :]}"


def bump_file(path: Path, kind: BumpKind) -> Result[BumpOutcome, FyreError]:
    """Bump the version stored in `path` and rewrite the file.

    Nothing is written unless the version line was found and parsed.
    """
    try:
        # newline="" keeps CRLF line endings intact through the rewrite
        with path.open(encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            FyreError(
                kind="io_error",
                message=f"Failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    found = find_version(text, source=path.name)
    if isinstance(found, Err):
        return found

    old = found.value.version
    new = old.bump(kind)

    try:
        atomic_write_text(path, replace_version(text, found.value, new))
    except OSError as e:
        return Err(
            FyreError(
                kind="io_error",
                message=f"Failed to write updated {path.name}: {e}",
                hint=str(path),
            )
        )

    return Ok(BumpOutcome(path=path, old=old, new=new))
