"""Result types for page export operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ExportStatus(str, Enum):
    """Outcome of a single export invocation."""

    COPIED = "copied"
    CONVERTED = "converted"
    NO_CONTENT = "no_content"
    CLIPBOARD_FAILED = "clipboard_failed"


@dataclass
class ExportResult:
    """
    Result of exporting one page.

    Attributes:
        status: What happened
        markdown: The assembled Markdown, None when no content was found
        title: Title line used for the document, if any
    """

    status: ExportStatus
    markdown: Optional[str] = None
    title: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (ExportStatus.COPIED, ExportStatus.CONVERTED)
