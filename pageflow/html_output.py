"""
HTML serialisation of paginated output.
"""

from __future__ import annotations

from html import escape

from bs4 import Tag

from .flow.flow_constants import PX_PER_INCH
from .flow.flow_settings import FlowSettings


def _inches(value: float) -> str:
    return f"{value / PX_PER_INCH:g}in"


def page_stylesheet(settings: FlowSettings) -> str:
    """Return print CSS matching the page geometry in ``settings``.

    Example:
        >>> "8.5in" in page_stylesheet(FlowSettings())
        True
    """

    width = _inches(settings.page_width)
    height = _inches(settings.page_height)
    top = _inches(settings.padding_top)
    bottom = _inches(settings.padding_bottom)
    left = _inches(settings.padding_left)
    right = _inches(settings.padding_right)
    content = _inches(settings.content_height)
    return f"""
.page {{
    width: {width};
    height: {height};
    padding: {top} {right} {bottom} {left};
    margin: 0.25in auto;
    background: white;
    position: relative;
    overflow: hidden;
    box-shadow: 0 2px 8px rgba(0,0,0,0.3);
    box-sizing: border-box;
}}
.page-content {{
    height: {content};
    overflow: hidden;
    outline: none;
}}
.page-number {{
    position: absolute;
    bottom: 0.4in;
    right: {right};
    font-size: 10pt;
    color: #666;
}}
{settings.section_selector} {{
    break-inside: avoid;
    margin-bottom: 1.5em;
}}
.toc-entry {{
    display: flex;
    align-items: baseline;
    margin: 0.6em 0;
    text-decoration: none;
    color: inherit;
    cursor: pointer;
}}
.toc-entry.indent {{
    padding-left: 1.5em;
    font-size: 0.9em;
}}
.toc-text, .toc-page-num {{
    flex-shrink: 0;
}}
.toc-dots {{
    flex-grow: 1;
    border-bottom: 1px dotted #ccc;
    margin: 0 0.75em;
    min-width: 1em;
}}
.toc-page-num {{
    color: #666;
}}
@media print {{
    body {{ background: white; }}
    .page {{
        margin: 0;
        box-shadow: none;
        page-break-after: always;
        page-break-inside: avoid;
    }}
    .page:last-child {{ page-break-after: avoid; }}
    @page {{ size: {width} {height}; margin: 0; }}
}}
"""


def render_document(
    *,
    pages_container: Tag,
    settings: FlowSettings,
    toc_container: Tag | None = None,
    title: str = "Document",
) -> str:
    """Return a standalone HTML document with the stylesheet and pages.

    Args:
        pages_container: Element holding the generated pages.
        settings: Flow settings used for the stylesheet.
        toc_container: Optional rendered TOC placed before the pages.
        title: Document title.
    Returns:
        HTML text.
    """

    toc = (
        f'<nav class="toc">{toc_container}</nav>\n'
        if toc_container is not None
        else ""
    )
    return (
        "<!DOCTYPE html>\n"
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>{page_stylesheet(settings)}</style>\n"
        "</head>\n<body>\n"
        f"{toc}{pages_container}\n"
        "</body>\n</html>\n"
    )
