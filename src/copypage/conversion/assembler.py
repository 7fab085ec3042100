"""Normalization and title handling for converted Markdown."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .rules import flatten

EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


class OutputAssembler:
    """
    Turns a raw Markdown fragment into the final document.

    Trailing whitespace is stripped from every line, runs of three or more
    newlines collapse to one blank line, and the result is trimmed. A
    ``# Title`` line is prepended unless the body already has that line.

    Example:
        assembler = OutputAssembler()
        title = assembler.title_for(content_root, soup)
        markdown = assembler.assemble(fragment, title)
    """

    def __init__(self, include_title: bool = True):
        self._include_title = include_title

    @staticmethod
    def normalize(markdown: str) -> str:
        """Clean up whitespace in a Markdown string."""
        markdown = markdown.replace("\r\n", "\n").replace("\r", "\n")
        # Strip lines first so whitespace-only lines cannot split a newline run
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))
        markdown = EXCESS_NEWLINES_RE.sub("\n\n", markdown)
        return markdown.strip()

    @staticmethod
    def title_for(root: Tag, document: Optional[BeautifulSoup] = None) -> Optional[str]:
        """
        Find the page title.

        Uses the first ``h1`` inside the content root, falling back to the
        document's ``<title>``.
        """
        heading = root if root.name == "h1" else root.find("h1")
        if isinstance(heading, Tag):
            text = flatten(heading)
            if text:
                return text

        if document is not None and isinstance(document.title, Tag):
            text = flatten(document.title)
            if text:
                return text
        return None

    def assemble(self, fragment: str, title: Optional[str] = None) -> str:
        """Normalize ``fragment`` and prepend the title line."""
        body = self.normalize(fragment)
        if not self._include_title or not title:
            return body

        heading = f"# {title}"
        # The content h1 can follow an intro paragraph or admonition
        if heading in body.split("\n"):
            return body
        return self.normalize(f"{heading}\n\n{body}")
