"""Protocol definitions for content conversion."""

from typing import Protocol

from bs4.element import PageElement, Tag


class MarkdownConverter(Protocol):
    """
    Protocol for converting a content root to Markdown.

    Implementations receive a disposable, already filtered clone of the
    content root and return the raw (not yet normalized) Markdown fragment.
    """

    def convert(self, root: Tag) -> str:
        """
        Convert a content root to Markdown.

        Args:
            root: Filtered clone of the page's content element

        Returns:
            Raw Markdown fragment
        """
        ...


class RenderContext(Protocol):
    """
    View of the traversal engine handed to every serialization rule.

    Rules call back into the context to serialize children before applying
    their own wrapping syntax.
    """

    @property
    def depth(self) -> int:
        """Current list nesting depth."""
        ...

    def children(self, element: Tag) -> str:
        """Serialize the children of ``element`` as block content."""
        ...

    def inline(self, element: Tag) -> str:
        """Serialize the children of ``element`` as one inline run."""
        ...

    def inline_node(self, node: PageElement) -> str:
        """Serialize a single node in inline mode."""
        ...

    def block(self, element: Tag) -> str:
        """Serialize ``element`` itself at the current depth."""
        ...

    def nested(self, element: Tag) -> str:
        """Serialize ``element`` one list level deeper."""
        ...
