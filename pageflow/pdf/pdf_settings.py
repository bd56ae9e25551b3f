"""Fonts, styles, and output settings for PDF rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from reportlab.lib import colors
from reportlab.lib.enums import TA_JUSTIFY, TA_LEFT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet

from ..flow.flow_constants import PT_PER_PX

HEADING_SIZES = {
    "h1": (20.0, 24.0),
    "h2": (16.0, 20.0),
    "h3": (13.0, 16.0),
    "h4": (12.0, 15.0),
    "h5": (11.0, 14.0),
    "h6": (10.0, 13.0),
}


@dataclass(slots=True)
class PdfSettings:
    """Typography used for both measurement and PDF output.

    Example:
        >>> PdfSettings().section_gap_px
        24.0
    """

    font_name: str = "Times-Roman"
    font_bold_name: str = "Times-Bold"
    mono_font_name: str = "Courier"
    body_font_size: float = 11.0
    body_leading: float = 14.0
    section_gap: float = 18.0
    hyphenation_lang: str = "en_US"
    page_number_font_size: float = 10.0
    page_number_color: colors.Color = colors.HexColor("#666666")
    toc_leader_color: colors.Color = colors.HexColor("#cccccc")
    debug_borders: bool = False

    @property
    def section_gap_px(self) -> float:
        """Return the gap after each block in CSS pixels."""

        return self.section_gap / PT_PER_PX


def build_styles(settings: PdfSettings) -> Dict[str, ParagraphStyle]:
    """Create paragraph styles keyed by the HTML element they render.

    Args:
        settings: PDF typography settings.
    Returns:
        Mapping of style keys to ParagraphStyle objects.

    Example:
        >>> styles = build_styles(PdfSettings())
        >>> "body" in styles and "h2" in styles
        True
    """

    base = getSampleStyleSheet()
    body = ParagraphStyle(
        "Body",
        parent=base["Normal"],
        fontName=settings.font_name,
        fontSize=settings.body_font_size,
        leading=settings.body_leading,
        alignment=TA_JUSTIFY,
        spaceBefore=0,
        spaceAfter=6,
        embeddedHyphenation=1,
    )
    styles: Dict[str, ParagraphStyle] = {"body": body}
    for name, (size, leading) in HEADING_SIZES.items():
        styles[name] = ParagraphStyle(
            name.upper(),
            parent=body,
            fontName=settings.font_bold_name,
            fontSize=size,
            leading=leading,
            alignment=TA_LEFT,
            spaceBefore=0,
            spaceAfter=size * 0.5,
            keepWithNext=False,
        )
    styles["li"] = ParagraphStyle(
        "ListItem",
        parent=body,
        alignment=TA_LEFT,
        leftIndent=18,
        bulletIndent=6,
        spaceAfter=2,
    )
    styles["pre"] = ParagraphStyle(
        "Pre",
        parent=body,
        fontName=settings.mono_font_name,
        fontSize=settings.body_font_size - 2,
        leading=settings.body_leading - 2,
        alignment=TA_LEFT,
    )
    styles["toc"] = ParagraphStyle(
        "Toc",
        parent=body,
        alignment=TA_LEFT,
        spaceBefore=4,
        spaceAfter=4,
    )
    styles["toc-indent"] = ParagraphStyle(
        "TocIndent",
        parent=styles["toc"],
        fontSize=settings.body_font_size * 0.9,
        leftIndent=18,
    )
    styles["toc-title"] = ParagraphStyle(
        "TocTitle", parent=styles["h1"], spaceAfter=12
    )
    return styles
