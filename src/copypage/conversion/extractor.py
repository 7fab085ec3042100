"""Content root location and chrome removal."""

import copy
import logging
import re
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ..errors import ContentNotFoundError
from ..models.config import DEFAULT_CONTENT_SELECTOR

logger = logging.getLogger(__name__)

PageSource = Union[str, bytes, BeautifulSoup]

# Interactive or navigational elements with no Markdown equivalent
CHROME_SELECTORS = [
    "nav",
    '[role="navigation"]',
    "button",
    ".copyPageButton",
    ".hash-link",
    ".theme-doc-breadcrumbs",
    ".theme-doc-toc-desktop",
    ".theme-doc-toc-mobile",
    ".theme-doc-version-badge",
    ".theme-doc-version-banner",
    ".pagination-nav",
    "script",
    "style",
    "noscript",
    "template",
]


def _detect_encoding(html: bytes) -> str:
    """Detect character encoding from a meta charset declaration."""
    head = html[:2048].decode("latin-1", errors="ignore")
    charset_match = re.search(r'charset=["\']?([^"\'\s>;]+)', head, re.IGNORECASE)
    if charset_match:
        return charset_match.group(1).strip()
    return "utf-8"


def parse_page(page: PageSource) -> BeautifulSoup:
    """
    Parse a page into a BeautifulSoup document.

    An already parsed document is returned as-is; callers only ever touch
    clones of it.
    """
    if isinstance(page, BeautifulSoup):
        return page
    if isinstance(page, bytes):
        encoding = _detect_encoding(page)
        try:
            text = page.decode(encoding, errors="replace")
        except LookupError:
            text = page.decode("utf-8", errors="replace")
        return BeautifulSoup(text, "html.parser")
    return BeautifulSoup(page, "html.parser")


class ContentExtractor:
    """
    Locates a page's content root and returns a filtered, disposable clone.

    The live document is never modified: chrome removal and link resolution
    happen on a deep copy of the content root.

    Example:
        extractor = ContentExtractor(selector="article")
        root = extractor.extract(soup)
    """

    def __init__(
        self,
        selector: str = DEFAULT_CONTENT_SELECTOR,
        remove_selectors: Optional[list[str]] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize the content extractor.

        Args:
            selector: CSS selector of the content root
            remove_selectors: CSS selectors for elements to remove (extends defaults)
            base_url: Resolve relative href/src attributes against this URL
        """
        self._selector = selector
        self._remove_selectors = list(CHROME_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)
        self._base_url = base_url

    @property
    def selector(self) -> str:
        return self._selector

    def locate(self, soup: BeautifulSoup) -> Tag:
        """
        Find the content root in the live document.

        Raises:
            ContentNotFoundError: If the selector matches nothing
        """
        element = soup.select_one(self._selector)
        if not isinstance(element, Tag):
            raise ContentNotFoundError(self._selector)
        return element

    def _remove_chrome(self, root: Tag) -> None:
        for selector in self._remove_selectors:
            for element in root.select(selector):
                # Already gone with a matched ancestor
                if element.decomposed:
                    continue
                element.decompose()

    def _resolve_links(self, root: Tag, base_url: str) -> None:
        """Convert relative URLs to absolute URLs."""
        for tag in root.find_all("a", href=True):
            href = tag["href"]
            if href.startswith("#"):
                continue  # Fragment links are dropped during conversion
            if not href.startswith(("http://", "https://", "//", "mailto:", "tel:")):
                tag["href"] = urljoin(base_url, href)

        for tag in root.find_all(src=True):
            src = tag["src"]
            if not src.startswith(("http://", "https://", "//", "data:")):
                tag["src"] = urljoin(base_url, src)

    def extract(self, page: PageSource) -> Tag:
        """
        Locate, clone and filter the content root.

        Args:
            page: HTML text, raw HTML bytes, or a parsed document

        Returns:
            Detached copy of the content root with chrome removed

        Raises:
            ContentNotFoundError: If the selector matches nothing
        """
        soup = parse_page(page)
        root = copy.copy(self.locate(soup))

        self._remove_chrome(root)
        if self._base_url:
            self._resolve_links(root, self._base_url)

        logger.debug(f"Extracted content root {self._selector!r} ({len(root.get_text())} chars of text)")
        return root
