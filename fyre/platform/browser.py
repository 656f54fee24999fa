"""Open URLs in the user's default browser."""

from __future__ import annotations

import webbrowser
from typing import Protocol

__all__ = ["UrlOpener", "open_url"]


class UrlOpener(Protocol):
    def __call__(self, url: str) -> bool: ...


def open_url(url: str) -> bool:
    """Open `url` in a new browser tab. Returns False if no browser could be launched."""
    return webbrowser.open_new_tab(url)
