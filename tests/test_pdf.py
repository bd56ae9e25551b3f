"""Tests for ReportLab measurement and PDF output."""

from __future__ import annotations

from pathlib import Path

import pytest
from pyphen import Pyphen
from reportlab.platypus import Paragraph, Preformatted
from reportlab.platypus.flowables import AnchorFlowable

from pageflow.errors import PageflowError
from pageflow.flow import FlowSettings, PageFlow
from pageflow.parser import parse_html
from pageflow.pdf import (
    PdfSettings,
    ReportLabMeasurer,
    block_flowables,
    build_pdf,
    build_styles,
)

SOURCE = """
<div id="source">
  <div class="section"><h2>Introduction</h2>
    <p>Pagination keeps <b>every</b> section whole and moves it to the next
    page when it would not fit.</p></div>
  <div class="section"><h3>Details</h3>
    <ul><li>first point</li><li>second point</li></ul>
    <pre>code block
  indented</pre></div>
  <div class="section"><p>Untitled trailing text.</p></div>
</div>
<nav id="toc"></nav>
<div id="pages"></div>
"""


@pytest.fixture(scope="module")
def styles():
    return build_styles(PdfSettings())


def test_block_flowables_by_element(styles) -> None:
    block = parse_html(
        '<div id="anchor"><h2>Head</h2><p>Body <i>text</i></p>'
        "<ol start=\"3\"><li>x</li><li>y</li></ol><pre>a\nb</pre>loose</div>"
    ).div

    flows = block_flowables(block=block, styles=styles, hyphenator=Pyphen(lang="en_US"))

    assert isinstance(flows[0], AnchorFlowable)
    paragraphs = [f for f in flows if isinstance(f, Paragraph)]
    assert paragraphs[0].style is styles["h2"]
    assert [p.bulletText for p in paragraphs if p.style is styles["li"]] == ["3.", "4."]
    assert any(isinstance(f, Preformatted) for f in flows)
    assert paragraphs[-1].style is styles["body"], "loose text becomes a body paragraph"


def test_blank_blocks_produce_no_paragraphs(styles) -> None:
    block = parse_html("<div><p>   </p><script>x()</script></div>").div

    assert block_flowables(block=block, styles=styles, hyphenator=Pyphen(lang="en_US")) == []


def test_measurer_grows_with_content() -> None:
    measurer = ReportLabMeasurer()
    short = parse_html('<div class="section"><p>One line.</p></div>').div
    long = parse_html(
        '<div class="section"><p>' + "Many words in a paragraph. " * 80 + "</p></div>"
    ).div

    short_height = measurer.measure(short, 600.0)
    long_height = measurer.measure(long, 600.0)

    assert short_height > PdfSettings().section_gap_px
    assert long_height > short_height * 3
    assert measurer.measure(long, 300.0) > long_height, "narrower text wraps taller"


def test_build_pdf_writes_every_page(tmp_path: Path) -> None:
    settings = FlowSettings.from_options({"page_height": "4in", "page_width": "5in"})
    doc = parse_html(SOURCE)
    flow = PageFlow(
        content_source="#source",
        pages_container="#pages",
        toc_container="#toc",
        root=doc,
        measurer=ReportLabMeasurer(),
        settings=settings,
    )
    result = flow.flow()
    output = tmp_path / "out.pdf"

    build_pdf(
        pages=flow.pages,
        output_path=output,
        settings=settings,
        toc_entries=result.toc_items,
        title="Sample",
    )

    data = output.read_bytes()
    assert data.startswith(b"%PDF")
    assert [e.title for e in result.toc_items] == ["Introduction", "Details"]


def test_build_pdf_without_toc(tmp_path: Path) -> None:
    settings = FlowSettings()
    doc = parse_html(SOURCE)
    flow = PageFlow(
        content_source="#source",
        pages_container="#pages",
        root=doc,
        measurer=ReportLabMeasurer(),
        settings=settings,
    )
    flow.flow()
    output = tmp_path / "plain.pdf"

    build_pdf(pages=flow.pages, output_path=output, settings=settings)

    assert output.stat().st_size > 0


def test_build_pdf_requires_pages(tmp_path: Path) -> None:
    with pytest.raises(PageflowError, match="No pages"):
        build_pdf(pages=[], output_path=tmp_path / "none.pdf")
