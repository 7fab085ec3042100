"""
copypage - Copy a rendered documentation page as Markdown.

Usage:
    from copypage import CopyPageAction, export_markdown

    markdown = export_markdown(html)

    action = CopyPageAction()
    result = action.copy(html)
    if action.copied:
        print("Copied!")
"""

__version__ = "1.0.0"

from .clipboard import Clipboard, CommandClipboard, TkClipboard
from .conversion import ContentExtractor, Html2TextConverter, OutputAssembler, PageToMarkdown
from .errors import ClipboardUnavailableError, ContentNotFoundError, CopyPageError, PageLoadError
from .export import CopyPageAction, PageExporter, export_markdown
from .models import (
    ClipboardConfig,
    ContentConfig,
    CopyPageConfig,
    ExportResult,
    ExportStatus,
    OutputConfig,
)

__all__ = [
    "__version__",
    # Core
    "CopyPageAction",
    "PageExporter",
    "export_markdown",
    # Conversion
    "ContentExtractor",
    "PageToMarkdown",
    "Html2TextConverter",
    "OutputAssembler",
    # Clipboard
    "Clipboard",
    "CommandClipboard",
    "TkClipboard",
    # Config
    "CopyPageConfig",
    "ContentConfig",
    "OutputConfig",
    "ClipboardConfig",
    # Results
    "ExportResult",
    "ExportStatus",
    # Errors
    "CopyPageError",
    "ContentNotFoundError",
    "ClipboardUnavailableError",
    "PageLoadError",
]
