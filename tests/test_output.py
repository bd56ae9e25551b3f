"""Tests for the standalone HTML document and the command-line script."""

from __future__ import annotations

import importlib.util
from pathlib import Path

from conftest import HeightMeasurer, document, section_html

from pageflow.flow import FlowSettings, PageFlow
from pageflow.html_output import page_stylesheet, render_document
from pageflow.parser import parse_html

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "build_pages.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("build_pages", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_stylesheet_uses_page_geometry() -> None:
    css = page_stylesheet(
        FlowSettings(page_width=480.0, page_height=672.0, padding_right=24.0)
    )

    assert "width: 5in;" in css
    assert "height: 7in;" in css
    assert "@page { size: 5in 7in; margin: 0; }" in css
    assert "right: 0.25in;" in css


def test_render_document_wraps_pages_and_toc(settings: FlowSettings) -> None:
    doc = document([section_html(100, header="Intro &amp; More")])
    flow = PageFlow(
        content_source="#source",
        pages_container="#pages",
        toc_container="#toc",
        measurer=HeightMeasurer(),
        settings=settings,
        root=doc,
    )
    flow.flow()

    html = render_document(
        pages_container=flow.pages_container,
        settings=settings,
        toc_container=flow.toc_container,
        title="A & B",
    )
    parsed = parse_html(html)

    assert html.startswith("<!DOCTYPE html>")
    assert parsed.title.get_text() == "A & B"
    assert parsed.select_one("nav.toc a.toc-entry")["href"] == "#intro-more"
    assert len(parsed.select("#pages > .page")) == 1


def test_render_document_without_toc(settings: FlowSettings) -> None:
    pages = parse_html('<div id="pages"></div>').div

    html = render_document(pages_container=pages, settings=settings)

    assert "<nav" not in html


def test_cli_writes_html_and_pdf(tmp_path: Path) -> None:
    source = tmp_path / "book.html"
    source.write_text(
        "<html><head><title>Book</title></head><body>"
        '<div class="section"><h2>Start</h2><p>Opening words.</p></div>'
        '<div class="section"><h2>Finish</h2><p>Closing words.</p></div>'
        "</body></html>",
        encoding="utf-8",
    )
    html_out = tmp_path / "out" / "book.html"
    pdf_out = tmp_path / "out" / "book.pdf"

    code = _load_script().main(
        [str(source), "--html", str(html_out), "--pdf", str(pdf_out), "--start-page", "7"]
    )

    assert code == 0
    written = parse_html(html_out.read_text(encoding="utf-8"))
    assert written.title.get_text() == "Book"
    assert written.select_one(".page")["id"] == "page-7"
    assert [a.get_text() for a in written.select(".toc-page-num")] == ["7", "7"]
    assert pdf_out.read_bytes().startswith(b"%PDF")


def test_cli_reports_bad_options(tmp_path: Path, capsys) -> None:
    source = tmp_path / "book.html"
    source.write_text("<div class='section'><h2>Only</h2></div>", encoding="utf-8")

    code = _load_script().main(
        [str(source), "--html", str(tmp_path / "x.html"), "--page-height", "tall"]
    )

    assert code == 2
    assert "Invalid page_height" in capsys.readouterr().err


def test_cli_missing_input(tmp_path: Path, capsys) -> None:
    code = _load_script().main([str(tmp_path / "absent.html"), "--pdf", "x.pdf"])

    assert code == 1
    assert "not found" in capsys.readouterr().err
