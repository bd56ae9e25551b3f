"""Story and template assembly for PDF output."""

from __future__ import annotations

from typing import Dict, List, Sequence

from pyphen import Pyphen
from reportlab.lib.colors import Color
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import (
    Flowable,
    Frame,
    KeepInFrame,
    NextPageTemplate,
    PageBreak,
    PageTemplate,
    Paragraph,
    Spacer,
)

from ..flow.flow_constants import PT_PER_PX, PX_PER_INCH
from ..flow.flow_settings import FlowSettings
from ..models import Page, TocEntry
from .pdf_flowables import block_flowables
from .pdf_settings import PdfSettings

TOC_TEMPLATE_ID = "toc"
PAGE_NUMBER_OFFSET = 0.4 * PX_PER_INCH


def _pt(px: float) -> float:
    return px * PT_PER_PX


def _template_id(page: Page) -> str:
    return f"page-{page.number}"


class TocLine(Flowable):
    """One linked TOC line: title, dotted leader and right-aligned page number.

    Args:
        entry: TOC entry to draw.
        style: Paragraph style supplying font, size and indent.
        leader_color: Stroke colour of the dotted leader.
    """

    def __init__(
        self, *, entry: TocEntry, style: ParagraphStyle, leader_color: Color
    ) -> None:
        super().__init__()
        self.entry = entry
        self.style = style
        self.leader_color = leader_color
        self.width = 0.0
        self.height = style.leading

    def wrap(self, availWidth, availHeight):
        self.width = availWidth
        return availWidth, self.height

    def getSpaceBefore(self):
        return self.style.spaceBefore

    def getSpaceAfter(self):
        return self.style.spaceAfter

    def draw(self):
        canv = self.canv
        style = self.style
        title = self.entry.title
        number = str(self.entry.page)
        baseline = (self.height - style.fontSize) / 2 + style.fontSize * 0.2
        canv.setFont(style.fontName, style.fontSize)
        canv.drawString(style.leftIndent, baseline, title)
        canv.drawRightString(self.width, baseline, number)
        gap = style.fontSize * 0.75
        start = (
            style.leftIndent
            + stringWidth(title, style.fontName, style.fontSize)
            + gap
        )
        end = self.width - stringWidth(number, style.fontName, style.fontSize) - gap
        if end > start:
            canv.saveState()
            canv.setStrokeColor(self.leader_color)
            canv.setDash(1, 2)
            canv.line(start, baseline, end, baseline)
            canv.restoreState()
        canv.linkRect(
            "", self.entry.id, (0, 0, self.width, self.height), relative=1
        )


def _content_frame(*, frame_id: str, settings: FlowSettings, debug: bool) -> Frame:
    """Return the single frame covering the content region of a page."""

    return Frame(
        _pt(settings.padding_left),
        _pt(settings.padding_bottom),
        _pt(settings.content_width),
        _pt(settings.content_height),
        leftPadding=0,
        rightPadding=0,
        topPadding=0,
        bottomPadding=0,
        id=frame_id,
        showBoundary=int(debug),
    )


def _on_page_factory(
    *, number: int | None, settings: FlowSettings, pdf_settings: PdfSettings
):
    """Create an onPage callback that bookmarks the page and draws its number.

    Args:
        number: Printed page number, or None for unnumbered pages.
        settings: Flow settings for page geometry.
        pdf_settings: Typography for the page number.
    Returns:
        onPage callback function.
    """

    def draw(canvas, doc):
        if number is None:
            return
        canvas.saveState()
        canvas.bookmarkPage(f"page-{number}")
        canvas.setFont(pdf_settings.font_name, pdf_settings.page_number_font_size)
        canvas.setFillColor(pdf_settings.page_number_color)
        canvas.drawRightString(
            _pt(settings.page_width - settings.padding_right),
            _pt(PAGE_NUMBER_OFFSET),
            str(number),
        )
        canvas.restoreState()

    return draw


def page_templates(
    *,
    pages: Sequence[Page],
    settings: FlowSettings,
    pdf_settings: PdfSettings,
    include_toc: bool,
) -> List[PageTemplate]:
    """Build one PageTemplate per packed page, preceded by the TOC template.

    Args:
        pages: Packed pages in order.
        settings: Flow settings for page geometry.
        pdf_settings: Typography settings.
        include_toc: Whether a TOC template leads the list.
    Returns:
        List of PageTemplate objects; the first is used for page one.
    """

    templates: List[PageTemplate] = []
    if include_toc:
        templates.append(
            PageTemplate(
                id=TOC_TEMPLATE_ID,
                frames=[
                    _content_frame(
                        frame_id="toc-frame",
                        settings=settings,
                        debug=pdf_settings.debug_borders,
                    )
                ],
                onPage=_on_page_factory(
                    number=None, settings=settings, pdf_settings=pdf_settings
                ),
            )
        )
    for page in pages:
        template_id = _template_id(page)
        templates.append(
            PageTemplate(
                id=template_id,
                frames=[
                    _content_frame(
                        frame_id=f"{template_id}-frame",
                        settings=settings,
                        debug=pdf_settings.debug_borders,
                    )
                ],
                onPage=_on_page_factory(
                    number=page.number, settings=settings, pdf_settings=pdf_settings
                ),
            )
        )
    return templates


def toc_flowables(
    *,
    entries: Sequence[TocEntry],
    styles: Dict[str, ParagraphStyle],
    pdf_settings: PdfSettings,
) -> List[Flowable]:
    """Build the contents heading and one linked line per entry."""

    flows: List[Flowable] = [Paragraph("Contents", styles["toc-title"])]
    for entry in entries:
        style = styles["toc-indent"] if entry.indent else styles["toc"]
        flows.append(
            TocLine(entry=entry, style=style, leader_color=pdf_settings.toc_leader_color)
        )
    return flows


def page_flowables(
    *,
    page: Page,
    settings: FlowSettings,
    styles: Dict[str, ParagraphStyle],
    hyphenator: Pyphen,
    pdf_settings: PdfSettings,
) -> KeepInFrame:
    """Return the content of one packed page as a single frame-sized block.

    Content taller than the frame is drawn past its bottom edge instead of
    spilling onto a new PDF page.
    """

    flows: List[Flowable] = []
    for section in page.sections:
        flows.extend(
            block_flowables(block=section, styles=styles, hyphenator=hyphenator)
        )
        flows.append(Spacer(1, pdf_settings.section_gap))
    if not flows:
        flows.append(Spacer(1, 1))
    return KeepInFrame(
        _pt(settings.content_width),
        _pt(settings.content_height),
        content=flows,
        mode="overflow",
    )


def story_for_pages(
    *,
    pages: Sequence[Page],
    page_blocks: Sequence[Flowable],
    toc_flow: Sequence[Flowable],
) -> List[Flowable]:
    """Assemble the platypus story.

    Args:
        pages: Packed pages in order.
        page_blocks: One flowable per page, aligned with ``pages``.
        toc_flow: TOC flowables, empty when no TOC is rendered.
    Returns:
        List of story flowables.
    """

    story: List[Flowable] = list(toc_flow)
    if toc_flow and pages:
        story.append(NextPageTemplate(_template_id(pages[0])))
        story.append(PageBreak())
    for idx, (page, block) in enumerate(zip(pages, page_blocks)):
        story.append(block)
        if idx + 1 < len(pages):
            story.append(NextPageTemplate(_template_id(pages[idx + 1])))
        story.append(PageBreak())
    if pages:
        story.pop()
    return story
