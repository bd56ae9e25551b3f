"""Tests for overflow, underflow and consolidation detection."""

from __future__ import annotations

from typing import List

from conftest import HeightMeasurer

from pageflow.editor import content_height, needs_reflow
from pageflow.flow import FlowSettings
from pageflow.models import Page
from pageflow.parser import new_page_elements, parse_html


def _pages(layout: List[List[float]]) -> List[Page]:
    """Build pages whose content children carry the given heights."""

    doc = parse_html('<div id="pages"></div>')
    container = doc.select_one("#pages")
    pages = []
    for number, heights in enumerate(layout, start=1):
        element, content = new_page_elements(container=container, number=number)
        for height in heights:
            block = doc.new_tag("div", attrs={"data-height": f"{height:g}"})
            content.append(block)
        pages.append(Page(number=number, element=element, content=content))
    return pages


def test_content_height_sums_children(settings: FlowSettings) -> None:
    page = _pages([[120, 80.5]])[0]

    assert content_height(
        content=page.content, measurer=HeightMeasurer(), width=800.0
    ) == 200.5


def test_underflow_boundary_is_strict(settings: FlowSettings) -> None:
    """550 of 600 used: a 39px first child triggers, 40px does not."""
    # the 500px block keeps the consolidation check quiet
    pulls = _pages([[550], [39, 500]])
    stays = _pages([[550], [40, 500]])

    assert needs_reflow(pages=pulls, measurer=HeightMeasurer(), settings=settings)
    assert not needs_reflow(pages=stays, measurer=HeightMeasurer(), settings=settings)


def test_overflow_beyond_slack(settings: FlowSettings) -> None:
    assert needs_reflow(
        pages=_pages([[611]]), measurer=HeightMeasurer(), settings=settings
    )
    assert not needs_reflow(
        pages=_pages([[610]]), measurer=HeightMeasurer(), settings=settings
    )


def test_overflow_on_later_page(settings: FlowSettings) -> None:
    pages = _pages([[500], [300, 400]])

    assert needs_reflow(pages=pages, measurer=HeightMeasurer(), settings=settings)


def test_consolidation_catches_empty_last_page(settings: FlowSettings) -> None:
    """An emptied last page is folded into the page before it."""
    assert needs_reflow(
        pages=_pages([[200], []]), measurer=HeightMeasurer(), settings=settings
    )


def test_consolidation_boundary(settings: FlowSettings) -> None:
    """The empty last page only counts when the previous page has 20px spare."""
    # 0 < 600 - 579 - 20 = 1
    assert needs_reflow(
        pages=_pages([[579], []]), measurer=HeightMeasurer(), settings=settings
    )
    # 0 < 600 - 580 - 20 = 0 is false
    assert not needs_reflow(
        pages=_pages([[580], []]), measurer=HeightMeasurer(), settings=settings
    )


def test_balanced_pages_need_nothing(settings: FlowSettings) -> None:
    pages = _pages([[300, 295], [320, 270], [450]])

    assert not needs_reflow(pages=pages, measurer=HeightMeasurer(), settings=settings)


def test_single_page_under_budget(settings: FlowSettings) -> None:
    assert not needs_reflow(
        pages=_pages([[100]]), measurer=HeightMeasurer(), settings=settings
    )


def test_empty_page_list(settings: FlowSettings) -> None:
    assert not needs_reflow(pages=[], measurer=HeightMeasurer(), settings=settings)
