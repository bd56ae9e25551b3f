"""Conversion of HTML blocks into ReportLab flowables."""

from __future__ import annotations

from typing import Dict, List
from xml.sax.saxutils import escape, quoteattr

from bs4 import NavigableString, PageElement, Tag
from pyphen import Pyphen
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Paragraph, Preformatted, Spacer
from reportlab.platypus.flowables import AnchorFlowable

from ..parser import element_text, is_text_run
from ..text import hyphenate_html

_PARAGRAPH_TAGS = {
    "p",
    "blockquote",
    "address",
    "figcaption",
    "dt",
    "dd",
    "caption",
    "summary",
}
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_LIST_TAGS = {"ul", "ol"}
_SKIP_TAGS = {"script", "style", "template", "head", "title", "meta", "link"}
_BLOCK_CONTAINERS = {
    "div",
    "section",
    "article",
    "aside",
    "header",
    "footer",
    "main",
    "nav",
    "figure",
    "details",
    "dl",
    "li",
    "table",
    "tbody",
    "thead",
    "tfoot",
    "tr",
    "td",
    "th",
    "form",
    "fieldset",
}
_SIMPLE_INLINE = {
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
    "cite": "i",
    "u": "u",
    "ins": "u",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "sup": "super",
    "sub": "sub",
}


def _inline_markup(node: PageElement, *, mono_font: str) -> str:
    """Convert inline HTML into ReportLab paragraph markup.

    Args:
        node: Text run or inline element.
        mono_font: Font used for ``code``/``kbd``/``samp``.
    Returns:
        Paragraph markup string.
    """

    if isinstance(node, NavigableString):
        return escape(str(node)) if is_text_run(node) else ""
    if not isinstance(node, Tag) or node.name in _SKIP_TAGS:
        return ""
    if node.name == "br":
        return "<br/>"
    inner = "".join(_inline_markup(child, mono_font=mono_font) for child in node.children)
    if node.name in _SIMPLE_INLINE:
        tag = _SIMPLE_INLINE[node.name]
        return f"<{tag}>{inner}</{tag}>"
    if node.name in {"code", "kbd", "samp", "tt"}:
        return f"<font name={quoteattr(mono_font)}>{inner}</font>"
    if node.name == "a":
        href = node.get("href")
        if isinstance(href, str) and href and not href.startswith("#"):
            return f"<a href={quoteattr(href)} color=\"blue\">{inner}</a>"
    return inner


def _paragraph(
    *,
    nodes: List[PageElement],
    style: ParagraphStyle,
    hyphenator: Pyphen,
    mono_font: str,
    **kwargs,
) -> Paragraph | None:
    """Return a hyphenated Paragraph for inline ``nodes`` or None if blank."""

    markup = "".join(
        _inline_markup(node, mono_font=mono_font) for node in nodes
    ).strip()
    if not markup or not _has_visible_text(nodes):
        return None
    return Paragraph(hyphenate_html(markup, hyphenator), style, **kwargs)


def _has_visible_text(nodes: List[PageElement]) -> bool:
    return any(element_text(node).strip() for node in nodes) or any(
        isinstance(node, Tag) and node.find("br") is not None for node in nodes
    )


def _list_flowables(
    *, tag: Tag, styles: Dict[str, ParagraphStyle], hyphenator: Pyphen
) -> List[Flowable]:
    """Return bulleted or numbered list item paragraphs."""

    flows: List[Flowable] = []
    ordered = tag.name == "ol"
    start = int(tag.get("start", 1)) if str(tag.get("start", "1")).isdigit() else 1
    items = tag.find_all("li", recursive=False)
    for offset, item in enumerate(items):
        bullet = f"{start + offset}." if ordered else "\u2022"
        para = _paragraph(
            nodes=list(item.children),
            style=styles["li"],
            hyphenator=hyphenator,
            mono_font=styles["pre"].fontName,
            bulletText=bullet,
        )
        if para is not None:
            flows.append(para)
    return flows


def _tag_flowables(
    *, tag: Tag, styles: Dict[str, ParagraphStyle], hyphenator: Pyphen
) -> List[Flowable]:
    """Return flowables for one block-level element."""

    name = tag.name
    if name in _SKIP_TAGS:
        return []
    if name in _HEADING_TAGS:
        para = _paragraph(
            nodes=[tag],
            style=styles[name],
            hyphenator=hyphenator,
            mono_font=styles["pre"].fontName,
        )
        return [para] if para is not None else []
    if name in _PARAGRAPH_TAGS:
        para = _paragraph(
            nodes=[tag],
            style=styles["body"],
            hyphenator=hyphenator,
            mono_font=styles["pre"].fontName,
        )
        return [para] if para is not None else []
    if name in _LIST_TAGS:
        return _list_flowables(tag=tag, styles=styles, hyphenator=hyphenator)
    if name == "pre":
        return [Preformatted(element_text(tag).strip("\n"), styles["pre"])]
    if name == "hr":
        return [Spacer(1, styles["body"].leading)]
    return _children_flowables(tag=tag, styles=styles, hyphenator=hyphenator)


def _children_flowables(
    *, tag: Tag, styles: Dict[str, ParagraphStyle], hyphenator: Pyphen
) -> List[Flowable]:
    """Return flowables for a container, gathering loose inline runs."""

    flows: List[Flowable] = []
    inline: List[PageElement] = []

    def flush() -> None:
        para = _paragraph(
            nodes=inline,
            style=styles["body"],
            hyphenator=hyphenator,
            mono_font=styles["pre"].fontName,
        )
        if para is not None:
            flows.append(para)
        inline.clear()

    for child in tag.children:
        if isinstance(child, Tag) and _is_block(child):
            flush()
            flows.extend(_tag_flowables(tag=child, styles=styles, hyphenator=hyphenator))
        else:
            inline.append(child)
    flush()
    return flows


def _is_block(tag: Tag) -> bool:
    return (
        tag.name in _PARAGRAPH_TAGS
        or tag.name in _HEADING_TAGS
        or tag.name in _LIST_TAGS
        or tag.name in _BLOCK_CONTAINERS
        or tag.name in _SKIP_TAGS
        or tag.name in {"pre", "hr"}
    )


def block_flowables(
    *, block: Tag, styles: Dict[str, ParagraphStyle], hyphenator: Pyphen
) -> List[Flowable]:
    """Return the flowables that render ``block``.

    A block with an ``id`` is preceded by a named destination so TOC links
    can target it.

    Args:
        block: Section or other top-level content element.
        styles: Style map from ``build_styles``.
        hyphenator: Hyphenation helper.
    Returns:
        List of flowables in reading order.
    """

    flows = _tag_flowables(tag=block, styles=styles, hyphenator=hyphenator)
    anchor = block.get("id")
    if anchor:
        flows.insert(0, AnchorFlowable(str(anchor)))
    return flows
