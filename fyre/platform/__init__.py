"""Platform abstraction layer."""

from .browser import UrlOpener, open_url
from .files import atomic_write_text, working_directory
from .process import (
    CommandRunner,
    ProcessError,
    run_streaming,
    split_command,
)

__all__ = [
    # browser
    "UrlOpener",
    "open_url",
    # files
    "atomic_write_text",
    "working_directory",
    # process
    "CommandRunner",
    "ProcessError",
    "run_streaming",
    "split_command",
]
