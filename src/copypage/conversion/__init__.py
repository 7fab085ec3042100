"""Content conversion for copypage (page content to Markdown)."""

from .assembler import OutputAssembler
from .extractor import CHROME_SELECTORS, ContentExtractor, parse_page
from .markdown import Html2TextConverter, PageToMarkdown
from .protocols import MarkdownConverter, RenderContext
from .rules import RULES, Rule, language_hint

__all__ = [
    # Protocols
    "MarkdownConverter",
    "RenderContext",
    # Implementations
    "ContentExtractor",
    "PageToMarkdown",
    "Html2TextConverter",
    "OutputAssembler",
    # Rule set
    "RULES",
    "Rule",
    "language_hint",
    "CHROME_SELECTORS",
    "parse_page",
]
