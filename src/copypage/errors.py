"""Exception hierarchy for page export failures."""

from __future__ import annotations

__all__ = [
    "CopyPageError",
    "ContentNotFoundError",
    "ClipboardUnavailableError",
    "PageLoadError",
]


class CopyPageError(RuntimeError):
    """Base exception for page export failures."""


class ContentNotFoundError(CopyPageError):
    """Raised when the content root selector matches nothing in the page."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"No content found for selector {selector!r}")
        self.selector = selector


class ClipboardUnavailableError(CopyPageError):
    """Raised when a clipboard backend cannot accept text."""


class PageLoadError(CopyPageError):
    """Raised when the page source cannot be read or fetched."""
