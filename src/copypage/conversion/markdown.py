"""Page content to Markdown conversion."""

from __future__ import annotations

import copy
import logging
import re
from typing import Literal, Optional

import html2text
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .rules import (
    INLINE_RULE_TAGS,
    INLINE_TAGS,
    OPAQUE_TAGS,
    RULES,
    Rule,
    convert_container,
    fenced_code,
)

logger = logging.getLogger(__name__)


class _Context:
    """RenderContext handed to rules; bound to one engine and one depth."""

    def __init__(self, engine: PageToMarkdown, depth: int):
        self._engine = engine
        self._depth = depth

    @property
    def depth(self) -> int:
        return self._depth

    def children(self, element: Tag) -> str:
        return self._engine._render_children(element, self._depth)

    def inline(self, element: Tag) -> str:
        return "".join(self._engine._render_inline(child, self._depth) for child in element.children)

    def inline_node(self, node: PageElement) -> str:
        return self._engine._render_inline(node, self._depth)

    def block(self, element: Tag) -> str:
        return self._engine._render_node(element, self._depth)

    def nested(self, element: Tag) -> str:
        return self._engine._render_node(element, self._depth + 1)


class PageToMarkdown:
    """
    Converts a content root to Markdown with a tag-keyed rule table.

    The tree is walked in document order. Every element is dispatched to the
    rule registered for its tag name; rules serialize children before they
    apply their own syntax. Runs of inline nodes inside a block container
    are serialized together so text keeps its spacing around inline markup.

    The returned fragment is raw: the OutputAssembler normalizes it.

    Example:
        converter = PageToMarkdown()
        fragment = converter.convert(content_root)
    """

    def __init__(
        self,
        rules: Optional[dict[str, Rule]] = None,
        unknown_tags: Literal["recurse", "skip"] = "recurse",
    ):
        """
        Initialize the converter.

        Args:
            rules: Extra or replacement rules keyed by lower-case tag name
            unknown_tags: "recurse" treats unknown elements as containers,
                "skip" drops them together with their content
        """
        self._rules = dict(RULES)
        self._inline_rules = set(INLINE_RULE_TAGS)
        if rules:
            custom = {name.lower(): rule for name, rule in rules.items()}
            self._rules.update(custom)
            # Custom rules apply inside inline runs too
            self._inline_rules.update(custom)
        self._unknown_tags = unknown_tags

    def convert(self, root: Tag) -> str:
        """Convert ``root`` and its descendants to a raw Markdown fragment."""
        return self._render_node(root, 0)

    def _rule_for(self, element: Tag) -> Optional[Rule]:
        name = (element.name or "").lower()
        if name in OPAQUE_TAGS:
            return None
        rule = self._rules.get(name)
        if rule is not None:
            return rule
        if self._unknown_tags == "skip":
            logger.debug(f"Skipping unknown element <{name}>")
            return None
        return convert_container

    def _render_node(self, node: PageElement, depth: int) -> str:
        if isinstance(node, NavigableString):
            if isinstance(node, PreformattedString):
                return ""
            return str(node).strip()
        if not isinstance(node, Tag):
            return ""
        rule = self._rule_for(node)
        if rule is None:
            return ""
        return rule(node, _Context(self, depth))

    def _render_children(self, element: Tag, depth: int) -> str:
        chunks: list[str] = []
        run: list[PageElement] = []

        def flush() -> None:
            text = "".join(self._render_inline(node, depth) for node in run).strip()
            if text:
                chunks.append(f"\n\n{text}\n\n")
            run.clear()

        for child in element.children:
            if _is_inline(child):
                run.append(child)
                continue
            flush()
            chunks.append(self._render_node(child, depth))
        flush()
        return "".join(chunks)

    def _render_inline(self, node: PageElement, depth: int) -> str:
        if isinstance(node, NavigableString):
            if isinstance(node, PreformattedString):
                return ""
            return str(node)
        if not isinstance(node, Tag):
            return ""
        name = (node.name or "").lower()
        if name in self._inline_rules or name == "pre":
            rule = self._rule_for(node)
            return rule(node, _Context(self, depth)) if rule else ""
        if self._rule_for(node) is None:
            return ""
        text = "".join(self._render_inline(child, depth) for child in node.children)
        if name in INLINE_TAGS:
            return text
        # Block markup inside an inline run is flattened to one line break
        # on each side so sibling blocks never fuse into one word
        text = text.strip()
        return f"\n{text}\n" if text else ""


def _is_inline(node: PageElement) -> bool:
    if isinstance(node, NavigableString):
        return True
    return isinstance(node, Tag) and (node.name or "").lower() in INLINE_TAGS


class Html2TextConverter:
    """
    Converts a content root to Markdown with html2text.

    Code blocks are rendered by the rule set instead, so fences carry the
    same language hints as PageToMarkdown output; everything else is left
    to html2text. A fence inside a list item is indented as item content.

    Example:
        converter = Html2TextConverter(base_url="https://docs.example.com/page")
        fragment = converter.convert(content_root)
    """

    PLACEHOLDER = "COPYPAGECODEBLOCK{index}END"

    def __init__(
        self,
        base_url: Optional[str] = None,
        body_width: int = 0,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        escape_snob: bool = False,
    ):
        """
        Initialize the html2text converter.

        Args:
            base_url: Base URL for resolving relative links
            body_width: Max line width (0 = no wrapping)
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            escape_snob: Escape all special Markdown chars
        """
        self._converter = html2text.HTML2Text(baseurl=base_url or "")
        self._converter.body_width = body_width
        self._converter.inline_links = True
        self._converter.wrap_links = False
        self._converter.protect_links = False
        self._converter.skip_internal_links = True
        self._converter.ignore_images = ignore_images
        self._converter.ignore_tables = ignore_tables
        self._converter.unicode_snob = unicode_snob
        self._converter.escape_snob = escape_snob
        self._converter.default_image_alt = ""
        self._converter.single_line_break = False
        self._converter.ul_item_mark = "-"

    @staticmethod
    def _list_indent(pre: Tag) -> str:
        """Continuation indent html2text uses for content of the enclosing list item."""
        if pre.find_parent("li") is None:
            return ""
        indent = ""
        parent_list = None
        for lst in reversed(pre.find_parents(["ul", "ol"])):
            indent += "   " if parent_list == "ol" else "  "
            parent_list = lst.name
        return indent + ("   " if parent_list == "ol" else "  ")

    def _extract_code_blocks(self, root: Tag) -> dict[str, tuple[str, str]]:
        """Replace every <pre> with a placeholder paragraph, returning fences and indents."""
        factory = BeautifulSoup("", "html.parser")
        blocks: dict[str, tuple[str, str]] = {}
        for index, pre in enumerate(root.find_all("pre")):
            if pre.find_parent("pre") is not None:
                continue
            token = self.PLACEHOLDER.format(index=index)
            blocks[token] = (fenced_code(pre), self._list_indent(pre))
            placeholder = factory.new_tag("p")
            placeholder.string = token
            pre.replace_with(placeholder)
        return blocks

    def convert(self, root: Tag) -> str:
        work = copy.copy(root)
        try:
            blocks = self._extract_code_blocks(work)
            markdown = self._converter.handle(str(work))
            for token, (block, list_indent) in blocks.items():
                markdown = re.sub(
                    rf"([ \t]*){token}",
                    lambda match: _indent(block, max(match.group(1), list_indent, key=len)),
                    markdown,
                )
            return markdown
        except Exception as e:
            logger.error(f"html2text conversion failed: {e}")
            # Plain text keeps the copy useful
            text: str = root.get_text(separator="\n")
            return text.strip() + "\n"


def _indent(block: str, indent: str) -> str:
    if not indent:
        return block
    return "\n".join(f"{indent}{line}" if line else line for line in block.split("\n"))
