"""Overflow and underflow detection for live pages."""

from __future__ import annotations

from typing import Sequence

from bs4 import Tag

from ..host import Measurer
from ..models import Page
from ..parser import element_children
from ..flow.flow_constants import (
    CONSOLIDATE_SLACK,
    OVERFLOW_SLACK,
    UNDERFLOW_SLACK,
    _debug,
)
from ..flow.flow_settings import FlowSettings


def content_height(*, content: Tag, measurer: Measurer, width: float) -> float:
    """Return the measured height of a page's content region.

    Args:
        content: ``div.page-content`` element.
        measurer: Height measurement collaborator.
        width: Measurement width in pixels.
    Returns:
        Sum of the measured heights of the region's element children.
    """

    return sum(measurer.measure(child, width) for child in element_children(content))


def needs_reflow(
    *, pages: Sequence[Page], measurer: Measurer, settings: FlowSettings
) -> bool:
    """Return True when any page overflows or could absorb following content.

    Pages are scanned in order; the first page that overflows by more than
    the overflow slack, or whose spare room would take the next page's first
    child, answers True. Finally the last page is checked against the spare
    room of the page before it.

    Args:
        pages: Live pages in order.
        measurer: Height measurement collaborator.
        settings: Flow settings with the page budget.
    Returns:
        True when a reflow would change the layout.
    """

    budget = settings.content_height
    width = settings.content_width
    heights = [
        content_height(content=page.content, measurer=measurer, width=width)
        for page in pages
    ]
    for idx, page in enumerate(pages):
        height = heights[idx]
        if height > budget + OVERFLOW_SLACK:
            _debug(msg=f"reflow: page {page.number} overflows ({height:.1f})")
            return True
        if idx + 1 >= len(pages):
            continue
        following = element_children(pages[idx + 1].content)
        if not following:
            continue
        first_height = measurer.measure(following[0], width)
        if first_height < budget - height - UNDERFLOW_SLACK:
            _debug(msg=f"reflow: page {page.number} can pull {first_height:.1f}")
            return True
    if len(pages) > 1:
        if heights[-1] < budget - heights[-2] - CONSOLIDATE_SLACK:
            _debug(msg="reflow: last page fits on the page before it")
            return True
    return False
