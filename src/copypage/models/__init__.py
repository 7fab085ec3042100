"""Copypage configuration and result models."""

from .config import (
    DEFAULT_CONTENT_SELECTOR,
    ClipboardConfig,
    ContentConfig,
    CopyPageConfig,
    OutputConfig,
)
from .results import ExportResult, ExportStatus

__all__ = [
    # Config
    "DEFAULT_CONTENT_SELECTOR",
    "ClipboardConfig",
    "ContentConfig",
    "CopyPageConfig",
    "OutputConfig",
    # Results
    "ExportResult",
    "ExportStatus",
]
