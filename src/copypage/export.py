"""Export a rendered documentation page as Markdown."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .clipboard import Clipboard
from .conversion.assembler import OutputAssembler
from .conversion.extractor import ContentExtractor, PageSource, parse_page
from .conversion.markdown import Html2TextConverter, PageToMarkdown
from .conversion.protocols import MarkdownConverter
from .errors import ContentNotFoundError
from .models.config import CopyPageConfig
from .models.results import ExportResult, ExportStatus

logger = logging.getLogger(__name__)


def build_converter(config: CopyPageConfig) -> MarkdownConverter:
    """Create the Markdown converter selected by ``config``."""
    if config.output.converter == "html2text":
        return Html2TextConverter(base_url=config.output.base_url)
    return PageToMarkdown(unknown_tags=config.content.unknown_tags)


class PageExporter:
    """
    Converts a page's content root to a Markdown document.

    Locates the content root, converts a filtered clone and assembles the
    final string. The page passed in is never modified.

    Example:
        exporter = PageExporter(CopyPageConfig())
        result = exporter.export(html)
        if result.ok:
            print(result.markdown)
    """

    def __init__(
        self,
        config: Optional[CopyPageConfig] = None,
        converter: Optional[MarkdownConverter] = None,
    ):
        self._config = config or CopyPageConfig()
        self._extractor = ContentExtractor(
            selector=self._config.content.selector,
            remove_selectors=self._config.content.remove_selectors,
            base_url=self._config.output.base_url,
        )
        self._converter = converter or build_converter(self._config)
        self._assembler = OutputAssembler(include_title=self._config.output.include_title)

    def export(self, page: PageSource) -> ExportResult:
        """
        Export ``page`` as Markdown.

        Args:
            page: HTML text, raw HTML bytes, or a parsed document

        Returns:
            ExportResult with status CONVERTED, or NO_CONTENT when the
            content root is missing
        """
        soup = parse_page(page)
        try:
            root = self._extractor.extract(soup)
        except ContentNotFoundError as e:
            logger.warning(f"Could not find markdown content: {e}")
            return ExportResult(status=ExportStatus.NO_CONTENT)

        fragment = self._converter.convert(root)
        title = self._assembler.title_for(root, soup)
        markdown = self._assembler.assemble(fragment, title)
        logger.debug(f"Exported {len(markdown)} chars of Markdown")
        return ExportResult(status=ExportStatus.CONVERTED, markdown=markdown, title=title)


def export_markdown(page: PageSource, config: Optional[CopyPageConfig] = None) -> Optional[str]:
    """Return the page's Markdown, or None if it has no content root."""
    return PageExporter(config).export(page).markdown


class CopyPageAction:
    """
    The "copy page" action: export, write to the clipboard, acknowledge.

    After a successful copy ``copied`` stays true for
    ``clipboard.acknowledge_seconds`` and then reverts on its own. The
    action never raises; the returned ExportResult tells what happened.

    Example:
        action = CopyPageAction()
        result = action.copy(html)
        label = "Copied!" if action.copied else "Copy page"
    """

    def __init__(
        self,
        config: Optional[CopyPageConfig] = None,
        exporter: Optional[PageExporter] = None,
        clipboard: Optional[Clipboard] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._config = config or CopyPageConfig()
        self._exporter = exporter or PageExporter(self._config)
        self._clipboard = clipboard or Clipboard.from_config(self._config.clipboard)
        self._clock = clock
        self._copied_at: Optional[float] = None

    @property
    def copied(self) -> bool:
        """Whether the acknowledgment state is currently shown."""
        if self._copied_at is None:
            return False
        if self._clock() - self._copied_at < self._config.clipboard.acknowledge_seconds:
            return True
        self._copied_at = None
        return False

    def reset(self) -> None:
        self._copied_at = None

    def copy(self, page: PageSource) -> ExportResult:
        result = self._exporter.export(page)
        if result.status is ExportStatus.NO_CONTENT or result.markdown is None:
            return result

        if not self._clipboard.write(result.markdown):
            return ExportResult(
                status=ExportStatus.CLIPBOARD_FAILED,
                markdown=result.markdown,
                title=result.title,
            )

        self._copied_at = self._clock()
        logger.info(f"Copied {len(result.markdown)} chars of Markdown to the clipboard")
        return ExportResult(status=ExportStatus.COPIED, markdown=result.markdown, title=result.title)
