"""Project detection.

A Flutter project root is identified by a `pubspec.yaml` in the current
directory. Parents are not searched: the tools fyre drives all expect to be
launched from the root itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import FyreError
from .result import Err, Ok, Result

__all__ = [
    "MARKER_FILENAME",
    "Project",
    "detect_project",
    "is_project_root",
]

MARKER_FILENAME = "pubspec.yaml"


@dataclass(frozen=True, slots=True)
class Project:
    """A detected Flutter project.

    The root contains:
    - pubspec.yaml (required, also holds the app version)
    - ios/ with Podfile and Podfile.lock (optional)
    """

    root: Path

    @property
    def pubspec_path(self) -> Path:
        """The marker file, which is also the version file."""
        return self.root / MARKER_FILENAME


def is_project_root(path: Path) -> bool:
    """Check whether `path` holds the project marker file."""
    return (path / MARKER_FILENAME).is_file()


def detect_project(cwd: Path | None = None) -> Result[Project, FyreError]:
    """Detect the project rooted at `cwd` (default: the current directory)."""
    root = (cwd or Path.cwd()).resolve()
    if not is_project_root(root):
        return Err(
            FyreError(
                kind="not_a_project",
                message="This is not a flutter project...",
                hint=f"No {MARKER_FILENAME} found in {root}",
            )
        )
    return Ok(Project(root=root))
