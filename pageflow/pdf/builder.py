"""PDF generation for packed pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from pyphen import Pyphen
from reportlab.platypus import BaseDocTemplate
from tqdm import tqdm

from ..errors import PageflowError
from ..flow.flow_constants import PT_PER_PX
from ..flow.flow_settings import FlowSettings
from ..models import Page, TocEntry
from .pdf_settings import PdfSettings, build_styles
from .pdf_story import page_flowables, page_templates, story_for_pages, toc_flowables

logger = logging.getLogger(__name__)


def build_pdf(
    *,
    pages: Sequence[Page],
    output_path: Path,
    settings: FlowSettings | None = None,
    toc_entries: Sequence[TocEntry] | None = None,
    pdf_settings: PdfSettings | None = None,
    title: str | None = None,
) -> None:
    """Render packed pages into a PDF, one PDF page per packed page.

    Args:
        pages: Pages produced by ``PageFlow.flow``.
        output_path: Destination file for the generated PDF.
        settings: Flow settings used for the pass; defaults to ``FlowSettings()``.
        toc_entries: Entries for a leading table of contents; omitted when empty.
        pdf_settings: Typography; should match the measurer used for the pass.
        title: Optional document title metadata.
    Returns:
        None. Writes the generated PDF to ``output_path``.

    Example:
        >>> build_pdf(pages=flow.pages, output_path=Path("out.pdf"))  # doctest: +SKIP
    """

    if not pages:
        raise PageflowError("No pages to render", details=str(output_path))
    resolved = settings or FlowSettings()
    typography = pdf_settings or PdfSettings()
    styles = build_styles(typography)
    hyphenator = Pyphen(lang=typography.hyphenation_lang)
    entries = list(toc_entries or [])

    doc = _build_doc(output_path=output_path, settings=resolved, title=title)
    doc.addPageTemplates(
        page_templates(
            pages=pages,
            settings=resolved,
            pdf_settings=typography,
            include_toc=bool(entries),
        )
    )
    blocks: List = []
    progress = tqdm(total=len(pages), desc="Rendering pages", unit="page")
    try:
        for page in pages:
            blocks.append(
                page_flowables(
                    page=page,
                    settings=resolved,
                    styles=styles,
                    hyphenator=hyphenator,
                    pdf_settings=typography,
                )
            )
            progress.update(1)
    finally:
        progress.close()
    toc_flow = (
        toc_flowables(entries=entries, styles=styles, pdf_settings=typography)
        if entries
        else []
    )
    doc.build(story_for_pages(pages=pages, page_blocks=blocks, toc_flow=toc_flow))
    logger.info("pageflow: wrote %d pages to %s", len(pages), output_path)


def _build_doc(
    *, output_path: Path, settings: FlowSettings, title: str | None
) -> BaseDocTemplate:
    """Return a BaseDocTemplate configured with page geometry.

    Args:
        output_path: Destination for the PDF.
        settings: Flow settings.
        title: Optional title metadata.
    Returns:
        BaseDocTemplate instance.
    """

    return BaseDocTemplate(
        str(output_path),
        pagesize=(settings.page_width * PT_PER_PX, settings.page_height * PT_PER_PX),
        leftMargin=settings.padding_left * PT_PER_PX,
        rightMargin=settings.padding_right * PT_PER_PX,
        topMargin=settings.padding_top * PT_PER_PX,
        bottomMargin=settings.padding_bottom * PT_PER_PX,
        title=title or "",
    )
