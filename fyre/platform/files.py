"""Filesystem helpers."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

__all__ = ["atomic_write_text", "working_directory"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace.

    A symlinked `path` is written through to its target, and an existing
    file keeps its permission bits.
    """
    target = path.resolve()
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.",
        suffix=".tmp",
        dir=str(target.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            # mkstemp creates 0600
            shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change the process working directory for the duration of the block.

    The previous directory is restored on exit, including when the block
    raises.

    Raises:
        NotADirectoryError: If `path` does not name an existing directory.
    """
    target = path.resolve()
    if not target.is_dir():
        raise NotADirectoryError(f"directory not found: {path}")

    previous = Path.cwd()
    os.chdir(target)
    try:
        yield target
    finally:
        os.chdir(previous)
