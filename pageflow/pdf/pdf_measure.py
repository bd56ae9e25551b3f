"""Block measurement backed by ReportLab wrapping."""

from __future__ import annotations

from typing import Dict

from bs4 import Tag
from pyphen import Pyphen
from reportlab.lib.styles import ParagraphStyle

from ..flow.flow_constants import PT_PER_PX
from ..layout_utils import flowables_height
from .pdf_flowables import block_flowables
from .pdf_settings import PdfSettings, build_styles


class ReportLabMeasurer:
    """Measures blocks by wrapping the flowables that will print them.

    Heights are reported in CSS pixels and include the gap that follows every
    block, so a page filled to its budget by this measurer fits the PDF frame.

    Args:
        pdf_settings: Typography; defaults to ``PdfSettings()``.
        styles: Prebuilt style map; built from ``pdf_settings`` when omitted.
        hyphenator: Hyphenation helper; defaults to the configured language.

    Example:
        >>> from pageflow.parser import parse_html
        >>> block = parse_html('<div class="section"><p>Hello</p></div>').div
        >>> ReportLabMeasurer().measure(block, 600.0) > 0
        True
    """

    def __init__(
        self,
        *,
        pdf_settings: PdfSettings | None = None,
        styles: Dict[str, ParagraphStyle] | None = None,
        hyphenator: Pyphen | None = None,
    ) -> None:
        self.pdf_settings = pdf_settings or PdfSettings()
        self.styles = styles or build_styles(self.pdf_settings)
        self.hyphenator = hyphenator or Pyphen(lang=self.pdf_settings.hyphenation_lang)

    def measure(self, block: Tag, width: float) -> float:
        flows = block_flowables(
            block=block, styles=self.styles, hyphenator=self.hyphenator
        )
        points = flowables_height(flowables=flows, width=width * PT_PER_PX)
        return points / PT_PER_PX + self.pdf_settings.section_gap_px
