"""
Per-element serialization rules.

Each rule takes an element and a RenderContext and returns a Markdown
fragment. Returning an empty string skips the element; rules that wrap
content ask the context to serialize the children first.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .protocols import RenderContext

Rule = Callable[[Tag, RenderContext], str]

LANGUAGE_CLASS_RE = re.compile(r"^language-([A-Za-z0-9_-]+)$")
ZERO_WIDTH_RE = re.compile(r"[\u200b\u200c\u200d\u2060\ufeff]")
LINE_BREAKS_RE = re.compile(r"\s*\n\s*")
BACKTICK_RUN_RE = re.compile(r"`+")

# Elements whose children are concatenated with no added syntax
CONTAINER_TAGS = frozenset({"div", "section", "span", "article", "main"})

# Elements that never carry page content
OPAQUE_TAGS = frozenset(
    {
        "script",
        "style",
        "noscript",
        "template",
        "svg",
        "iframe",
        "button",
        "input",
        "select",
        "textarea",
        "canvas",
    }
)

# Elements that flow with surrounding text instead of starting a block
INLINE_TAGS = frozenset(
    {
        "a",
        "abbr",
        "b",
        "br",
        "cite",
        "code",
        "del",
        "em",
        "i",
        "img",
        "ins",
        "kbd",
        "mark",
        "q",
        "s",
        "samp",
        "small",
        "span",
        "strong",
        "sub",
        "sup",
        "time",
        "u",
        "var",
    }
)

# Tags whose rule applies inside an inline run; everything else is flattened
INLINE_RULE_TAGS = frozenset({"a", "b", "br", "code", "em", "i", "img", "strong"})

LIST_TAGS = ("ul", "ol")

# Block children of a list item rendered under the item line
ITEM_BLOCK_TAGS = frozenset({"pre", "table", "blockquote"})
ITEM_BELOW_TAGS = [*LIST_TAGS, *sorted(ITEM_BLOCK_TAGS)]


def class_list(element: Tag) -> list[str]:
    """Return the element's classes as a list."""
    value = element.get("class") or []
    if isinstance(value, str):
        return value.split()
    return list(value)


def language_hint(pre: Tag) -> Optional[str]:
    """
    Extract the language of a code block from ``language-<token>`` classes.

    The nested ``code`` element is checked first, then the ``pre`` itself.
    """
    code = pre.find("code")
    for candidate in (code, pre):
        if not isinstance(candidate, Tag):
            continue
        for name in class_list(candidate):
            match = LANGUAGE_CLASS_RE.match(name)
            if match:
                return match.group(1)
    return None


def code_text(element: Tag) -> str:
    """Concatenated text of a code element; ``<br>`` becomes a newline."""
    parts: list[str] = []
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            parts.append(str(node))
    return "".join(parts)


def flatten(element: Tag) -> str:
    """Text content of ``element`` on a single line."""
    text = ZERO_WIDTH_RE.sub("", element.get_text())
    return LINE_BREAKS_RE.sub(" ", text).strip()


def single_line(text: str) -> str:
    return LINE_BREAKS_RE.sub(" ", text).strip()


def _longest_backtick_run(text: str) -> int:
    return max((len(run) for run in BACKTICK_RUN_RE.findall(text)), default=0)


def _fence(text: str) -> str:
    return "`" * max(3, _longest_backtick_run(text) + 1)


def _wrap_inline_code(text: str) -> str:
    delimiter = "`" * (_longest_backtick_run(text) + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{delimiter}{text}{delimiter}"


def _block(text: str) -> str:
    return f"\n\n{text}\n\n"


def convert_heading(element: Tag, ctx: RenderContext) -> str:
    level = int(element.name[1])
    text = flatten(element)
    if not text:
        return ""
    return _block(f"{'#' * level} {text}")


def convert_paragraph(element: Tag, ctx: RenderContext) -> str:
    text = ctx.inline(element).strip()
    if not text:
        return ""
    return _block(text)


def fenced_code(element: Tag) -> str:
    """Fenced code block for a <pre>, tagged with the language hint when present."""
    code = element.find("code")
    source = code if isinstance(code, Tag) else element
    text = code_text(source).strip("\n").rstrip()
    if not text:
        return ""
    fence = _fence(text)
    return f"{fence}{language_hint(element) or ''}\n{text}\n{fence}"


def convert_pre(element: Tag, ctx: RenderContext) -> str:
    block = fenced_code(element)
    return _block(block) if block else ""


def convert_code(element: Tag, ctx: RenderContext) -> str:
    parent = element.parent
    if isinstance(parent, Tag) and parent.name == "pre":
        return ""
    text = element.get_text().strip()
    if not text:
        return ""
    return _wrap_inline_code(text)


def _is_wrapper(node: PageElement) -> bool:
    """Whether ``node`` is a plain container around a nested list or block."""
    if not isinstance(node, Tag):
        return False
    name = node.name or ""
    if name in INLINE_TAGS or name in OPAQUE_TAGS or name in ITEM_BLOCK_TAGS or name in LIST_TAGS:
        return False
    return node.find(ITEM_BELOW_TAGS) is not None


def _split_item(parent: Tag, indent: str, ctx: RenderContext, inline_parts: list[str], below: list[str]) -> None:
    for child in parent.children:
        if isinstance(child, Tag) and child.name in LIST_TAGS:
            below.append(ctx.nested(child))
        elif isinstance(child, Tag) and child.name in ITEM_BLOCK_TAGS:
            block = ctx.block(child).strip("\n")
            if block:
                below.append("\n".join(f"{indent}  {line}" for line in block.split("\n")))
        elif _is_wrapper(child):
            # e.g. MDX tab panels wrapping a sub-list
            _split_item(child, indent, ctx, inline_parts, below)
        else:
            inline_parts.append(ctx.inline_node(child))


def _render_item(item: Tag, marker: str, ctx: RenderContext) -> str:
    indent = "  " * ctx.depth
    inline_parts: list[str] = []
    below: list[str] = []
    _split_item(item, indent, ctx, inline_parts, below)

    text = single_line("".join(inline_parts))
    lines = [f"{indent}{marker} {text}"] if text or below else []
    lines.extend(part for part in below if part)
    return "\n".join(lines)


def convert_list(element: Tag, ctx: RenderContext) -> str:
    """
    Bulleted or numbered list.

    Items are indented two spaces per nesting level; nested lists render
    directly under their parent item with no blank lines in between.
    """
    marker = "1." if element.name == "ol" else "-"
    items = [_render_item(item, marker, ctx) for item in element.find_all("li", recursive=False)]
    body = "\n".join(item for item in items if item)
    if not body:
        return ""
    if ctx.depth:
        return body
    return _block(body)


def convert_list_item(element: Tag, ctx: RenderContext) -> str:
    # Only reached for an <li> outside of <ul>/<ol>
    parent = element.parent
    marker = "1." if isinstance(parent, Tag) and parent.name == "ol" else "-"
    item = _render_item(element, marker, ctx)
    return f"\n{item}\n" if item else ""


def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def convert_table(element: Tag, ctx: RenderContext) -> str:
    """
    Pipe table with a ``---`` separator after the first row.

    Columns are counted from the first row; later rows are emitted as-is.
    """
    rows: list[list[str]] = []
    for row in element.find_all("tr"):
        if row.find_parent("table") is not element:
            continue
        cells = [
            single_line(ctx.inline(cell)).replace("|", "\\|")
            for cell in row.find_all(["th", "td"], recursive=False)
        ]
        if cells:
            rows.append(cells)

    if not rows:
        return ""

    lines = [_table_row(rows[0]), _table_row(["---"] * len(rows[0]))]
    lines.extend(_table_row(cells) for cells in rows[1:])
    return _block("\n".join(lines))


def convert_link(element: Tag, ctx: RenderContext) -> str:
    text = single_line(ctx.inline(element))
    if not text:
        return ""
    href = (element.get("href") or "").strip()
    # In-page anchors mean nothing once copied out of the page
    if not href or href.startswith("#"):
        return text
    return f"[{text}]({href})"


def convert_image(element: Tag, ctx: RenderContext) -> str:
    alt = single_line(element.get("alt") or "")
    src = (element.get("src") or "").strip()
    return f"![{alt}]({src})"


def convert_strong(element: Tag, ctx: RenderContext) -> str:
    text = element.get_text().strip()
    return f"**{text}**" if text else ""


def convert_emphasis(element: Tag, ctx: RenderContext) -> str:
    text = element.get_text().strip()
    return f"*{text}*" if text else ""


def convert_line_break(element: Tag, ctx: RenderContext) -> str:
    return "\n"


def convert_horizontal_rule(element: Tag, ctx: RenderContext) -> str:
    return _block("---")


def convert_blockquote(element: Tag, ctx: RenderContext) -> str:
    """Quote every line of the serialized content, collapsing blank runs."""
    text = ctx.children(element).strip()
    if not text:
        return ""
    quoted: list[str] = []
    for line in text.split("\n"):
        line = line.rstrip()
        if not line:
            if quoted[-1] == ">":
                continue
            quoted.append(">")
        else:
            quoted.append(f"> {line}")
    return _block("\n".join(quoted))


def convert_container(element: Tag, ctx: RenderContext) -> str:
    return ctx.children(element)


RULES: dict[str, Rule] = {
    "h1": convert_heading,
    "h2": convert_heading,
    "h3": convert_heading,
    "h4": convert_heading,
    "h5": convert_heading,
    "h6": convert_heading,
    "p": convert_paragraph,
    "pre": convert_pre,
    "code": convert_code,
    "ul": convert_list,
    "ol": convert_list,
    "li": convert_list_item,
    "table": convert_table,
    "a": convert_link,
    "img": convert_image,
    "strong": convert_strong,
    "b": convert_strong,
    "em": convert_emphasis,
    "i": convert_emphasis,
    "br": convert_line_break,
    "hr": convert_horizontal_rule,
    "blockquote": convert_blockquote,
}
RULES.update({tag: convert_container for tag in CONTAINER_TAGS})
