"""Tests for page packing through a full static pass."""

from __future__ import annotations

from dataclasses import replace

import pytest
from conftest import HeightMeasurer, document, section_html

from pageflow.flow import FlowSettings, PageFlow
from pageflow.models import Group


def _flow(doc, settings: FlowSettings, **kwargs) -> PageFlow:
    return PageFlow(
        content_source="#source",
        pages_container="#pages",
        measurer=HeightMeasurer(),
        settings=settings,
        root=doc,
        **kwargs,
    )


def _placed_heights(flow: PageFlow) -> list[list[str]]:
    return [[section["data-height"] for section in page.sections] for page in flow.pages]


def test_worked_example_without_widow_break(settings: FlowSettings) -> None:
    """Intro pairs with its body and Setup still fits on page one."""
    doc = document(
        [
            section_html(40, header="Intro"),
            section_html(300, text="Body"),
            section_html(250, header="Setup"),
            section_html(500, text="More"),
        ]
    )
    flow = _flow(doc, replace(settings, min_content_after_header=0.0))

    result = flow.flow()

    assert result is not None
    assert result.total_pages == 2, f"expected 2 pages, got {result.total_pages}"
    assert _placed_heights(flow) == [["40", "300", "250"], ["500"]]
    assert [(e.title, e.page, e.indent) for e in result.toc_items] == [
        ("Intro", 1, False),
        ("Setup", 1, False),
    ]


def test_default_widow_threshold_moves_tight_header(settings: FlowSettings) -> None:
    """With the default minimum, a header leaving 10px is pushed to a new page."""
    doc = document(
        [
            section_html(40, header="Intro"),
            section_html(300, text="Body"),
            section_html(250, header="Setup"),
            section_html(500, text="More"),
        ]
    )
    flow = _flow(doc, settings)

    result = flow.flow()

    assert _placed_heights(flow) == [["40", "300"], ["250"], ["500"]]
    assert [(e.title, e.page) for e in result.toc_items] == [("Intro", 1), ("Setup", 2)]


def test_packing_is_a_stable_partition(settings: FlowSettings) -> None:
    heights = [120, 80, 330, 45, 210, 600, 15, 90, 400, 260, 70]
    doc = document(
        section_html(h, header=f"H{i}" if i % 3 == 0 else None)
        for i, h in enumerate(heights)
    )
    flow = _flow(doc, settings)

    flow.flow()

    placed = [int(h) for page in _placed_heights(flow) for h in page]
    assert placed == heights, "sections must appear once each, in source order"


def test_groups_are_never_split(settings: FlowSettings) -> None:
    """A header-only pair lands on the same page even if that needs a new page."""
    doc = document(
        [
            section_html(500, text="Filler"),
            section_html(60, header="Pair"),
            section_html(200, text="Pair body"),
        ]
    )
    flow = _flow(doc, settings)

    flow.flow()

    assert _placed_heights(flow) == [["500"], ["60", "200"]]


def test_oversized_section_overflows_its_own_page(settings: FlowSettings) -> None:
    doc = document(
        [section_html(100), section_html(900), section_html(100)]
    )
    flow = _flow(doc, settings)

    flow.flow()

    assert _placed_heights(flow) == [["100"], ["900"], ["100"]]
    assert flow.pages[1].height == 900.0, "overflowing page records its real fill"


def test_widow_break_before_oversized_group_leaves_no_blank_page(
    settings: FlowSettings,
) -> None:
    doc = document([section_html(500), section_html(700, header="Huge")])
    flow = _flow(doc, settings)

    flow.flow()

    assert _placed_heights(flow) == [["500"], ["700"]]
    assert all(page.sections for page in flow.pages), "no page may be empty"


def test_source_is_not_modified(settings: FlowSettings) -> None:
    doc = document([section_html(100, header="Intro")])
    before = str(doc.select_one("#source"))

    _flow(doc, settings).flow()

    assert str(doc.select_one("#source")) == before
    assert doc.select_one("#source .section").get("id") is None, (
        "generated ids belong on the clones only"
    )


def test_page_numbers_start_at_configured_number(settings: FlowSettings) -> None:
    doc = document([section_html(400), section_html(400)])
    flow = _flow(doc, replace(settings, page_start_number=5))

    flow.flow()

    assert [page.number for page in flow.pages] == [5, 6]
    assert [el["id"] for el in doc.select("#pages > .page")] == ["page-5", "page-6"]
    assert [el.get_text() for el in doc.select(".page-number")] == ["5", "6"]


def test_page_markup_structure(settings: FlowSettings) -> None:
    doc = document([section_html(100, text="Hello")])

    _flow(doc, settings).flow()

    page = doc.select_one("#pages > div.page")
    content, number = [child for child in page.children if child.name]
    assert content["class"] == ["page-content"]
    assert number["class"] == ["page-number"]
    assert content.select_one(".section p").get_text() == "Hello"


def test_callbacks_fire_in_order(settings: FlowSettings) -> None:
    events: list[tuple] = []
    doc = document([section_html(400, header="A"), section_html(400, header="B")])
    flow = _flow(
        doc,
        replace(settings, min_content_after_header=0.0),
        on_page_create=lambda page, number: events.append(("page", number)),
        on_section_add=lambda section, page, number: events.append(
            ("section", section["data-height"], number)
        ),
        on_complete=lambda total, toc: events.append(("done", total, len(toc))),
    )

    flow.flow()

    assert events == [
        ("page", 1),
        ("section", "400", 1),
        ("page", 2),
        ("section", "400", 2),
        ("done", 2, 2),
    ]


def test_repeat_flow_rebuilds_pages(settings: FlowSettings) -> None:
    doc = document([section_html(400, header="A"), section_html(400, header="B")])
    flow = _flow(doc, settings)

    first = flow.flow()
    second = flow.flow()

    assert first.total_pages == second.total_pages == 2
    assert len(doc.select("#pages > .page")) == 2, "old pages must be cleared"
    assert [e.id for e in second.toc_items] == ["a-1", "b-1"], (
        "the id registry outlives a single pass"
    )


def test_packer_place_opens_page_when_full(settings: FlowSettings) -> None:
    doc = document([section_html(400), section_html(300)])
    flow = _flow(doc, settings)
    first, second = doc.select("#source .section")
    packer = flow.packer

    packer.place(Group.single(first, 400.0))
    page = packer.place(Group.single(second, 300.0))

    assert page.number == 2
    assert packer.current_fill == pytest.approx(300.0)
