"""Caret preservation across page rebuilds using global text offsets.

Reflow discards every page and rebuilds it from clones, so node references
cannot survive. The caret is converted to a character offset across the text
of all pages before the rebuild and mapped back onto the new text runs
afterwards.
"""

from __future__ import annotations

from typing import Sequence

from bs4 import PageElement, Tag

from ..host import CursorHost
from ..models import Caret, CursorSnapshot, Page
from ..parser import element_text, is_text_run, page_content_of, text_length, text_runs


def _offset_before(container: Tag, stop: PageElement) -> int:
    """Return the text length inside ``container`` preceding ``stop``."""

    total = 0
    for item in container.descendants:
        if item is stop:
            break
        if is_text_run(item):
            total += len(item)
    return total


def text_offset(container: Tag, node: PageElement, offset: int) -> int:
    """Return the caret's character offset within ``container``.

    Args:
        container: Content region holding the caret.
        node: Text run (offset counts characters) or element (offset counts
            child nodes).
        offset: Offset inside ``node``.
    Returns:
        Number of characters of ``container`` text before the caret.
    """

    if is_text_run(node):
        return _offset_before(container, node) + offset
    if node is container:
        return sum(text_length(child) for child in container.contents[:offset])
    if isinstance(node, Tag) and offset < len(node.contents):
        return _offset_before(container, node.contents[offset])
    return _offset_before(container, node) + text_length(node)


def position_from_offset(
    container: Tag, target: int
) -> tuple[PageElement, int] | None:
    """Return the (text run, offset) holding character ``target``.

    A target on the boundary between two runs resolves to the end of the
    earlier run. Targets past the end resolve to the end of the last run.

    Args:
        container: Content region to search.
        target: Character offset within ``container``.
    Returns:
        Tuple of (run, offset), or None when the region has no text.
    """

    current = 0
    runs = text_runs(container)
    for run in runs:
        if current + len(run) >= target:
            return run, target - current
        current += len(run)
    if runs:
        return runs[-1], len(runs[-1])
    return None


def end_position(container: Tag) -> tuple[PageElement, int]:
    """Return the caret position at the end of ``container``'s content."""

    runs = text_runs(container)
    if runs:
        return runs[-1], len(runs[-1])
    return container, len(container.contents)


def is_at_start_of_content(*, content: Tag, caret: Caret) -> bool:
    """Return True when ``caret`` sits before any visible text of ``content``.

    The caret must be at offset 0, and no preceding sibling of the caret node
    or of any ancestor up to ``content`` may hold non-whitespace text.
    """

    if caret.offset != 0:
        return False
    node = caret.node
    while node is not None and node is not content:
        for sibling in node.previous_siblings:
            if element_text(sibling).strip():
                return False
        node = node.parent
    return node is content


def _page_index(pages: Sequence[Page], content: Tag | None) -> int | None:
    for idx, page in enumerate(pages):
        if page.content is content:
            return idx
    return None


class CursorCodec:
    """Saves and restores the host caret as a global text offset.

    Args:
        host: Caret read/write collaborator.
    """

    def __init__(self, host: CursorHost) -> None:
        self.host = host

    def save(self, pages: Sequence[Page]) -> CursorSnapshot | None:
        """Return a snapshot of the caret, or None when it is not on a page.

        Args:
            pages: Live pages in order.
        Returns:
            CursorSnapshot or None.
        """

        caret = self.host.get_caret()
        if caret is None:
            return None
        global_offset = self.offset_of(pages, caret)
        if global_offset is None:
            return None
        total = sum(text_length(page.content) for page in pages)
        return CursorSnapshot(global_offset=global_offset, at_end=global_offset >= total)

    def restore(self, snapshot: CursorSnapshot | None, pages: Sequence[Page]) -> None:
        """Place the caret at ``snapshot``'s offset within rebuilt ``pages``.

        Offsets beyond the rebuilt text fall back to the end of the last page.

        Args:
            snapshot: Snapshot from ``save``; None leaves the caret alone.
            pages: Rebuilt pages in order.
        Returns:
            None.
        """

        if snapshot is None or not pages:
            return
        if snapshot.at_end:
            self.place_at_end(pages[-1].content)
            return
        remaining = snapshot.global_offset
        for page in pages:
            length = text_length(page.content)
            if remaining <= length:
                position = position_from_offset(page.content, remaining)
                if position is None:
                    self.place_at_end(page.content)
                    return
                node, offset = position
                self.host.set_caret(node, offset)
                self.host.scroll_into_view(node.parent or node, block="nearest")
                return
            remaining -= length
        self.place_at_end(pages[-1].content)

    def place_at_end(self, content: Tag) -> None:
        """Put the caret after the last text of ``content``."""

        node, offset = end_position(content)
        self.host.set_caret(node, offset)
        self.host.scroll_into_view(content, block="nearest")

    def offset_of(self, pages: Sequence[Page], caret: Caret) -> int | None:
        """Return the global offset of ``caret`` without touching the host."""

        content = page_content_of(caret.node)
        index = _page_index(pages, content)
        if index is None:
            return None
        return sum(text_length(page.content) for page in pages[:index]) + text_offset(
            content, caret.node, caret.offset
        )
