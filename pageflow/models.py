"""
Typed containers for paginated content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from bs4 import PageElement, Tag


@dataclass(slots=True)
class Group:
    """Sections that must land on the same page.

    Attributes:
        sections: One or two section tags, in source order.
        height: Summed measured height of the sections. May exceed the page
            budget; oversized groups are placed anyway and overflow visibly.
    """

    sections: List[Tag]
    height: float

    @classmethod
    def single(cls, section: Tag, height: float) -> "Group":
        """Return a one-section group."""
        return cls(sections=[section], height=height)


@dataclass(slots=True)
class Page:
    """A rendered page and its content region.

    Attributes:
        number: Printed page number.
        element: The ``div.page`` wrapper.
        content: The ``div.page-content`` region that holds placed sections.
        height: Running sum of the group heights placed on this page.
    """

    number: int
    element: Tag
    content: Tag
    height: float = 0.0

    @property
    def sections(self) -> List[Tag]:
        """Return the element children of the content region."""

        return [child for child in self.content.children if isinstance(child, Tag)]


@dataclass(slots=True)
class TocEntry:
    """One table-of-contents line."""

    title: str
    id: str
    page: int
    indent: bool = False


@dataclass(slots=True)
class Caret:
    """Insertion point reported by the host.

    Attributes:
        node: Text run or element that contains the caret.
        offset: Character offset for text runs, child index for elements.
        collapsed: False when the host has a non-empty selection.
    """

    node: PageElement
    offset: int
    collapsed: bool = True


@dataclass(slots=True)
class CursorSnapshot:
    """Page-independent caret position captured before a reflow."""

    global_offset: int
    at_end: bool


@dataclass(slots=True)
class PastePayload:
    """Clipboard flavours offered by the host on paste."""

    text: str = ""
    html: str = ""


@dataclass(slots=True)
class FlowResult:
    """Summary returned after a full pagination pass."""

    total_pages: int
    toc_items: List[TocEntry] = field(default_factory=list)
