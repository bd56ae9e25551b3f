"""
HTML tree helpers shared by the packer, the TOC builder and the editor.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString

PAGE_CLASS = "page"
PAGE_CONTENT_CLASS = "page-content"
PAGE_NUMBER_CLASS = "page-number"


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML document or fragment with the stdlib parser backend.

    Example:
        >>> parse_html("<p>hi</p>").p.get_text()
        'hi'
    """

    return BeautifulSoup(html, "html.parser")


def resolve_element(root: Tag | None, ref: Tag | str | None) -> Tag | None:
    """Return the element for a CSS selector or pass an element through.

    Args:
        root: Tree searched when ``ref`` is a selector.
        ref: Selector string, element, or None.
    Returns:
        Matching element or None.
    """

    if ref is None or isinstance(ref, Tag):
        return ref
    if root is None:
        return None
    return root.select_one(ref)


def select_sections(root: Tag, selector: str) -> List[Tag]:
    """Return every element under ``root`` matching ``selector`` in order."""

    return list(root.select(selector))


def has_class(node: PageElement | None, name: str) -> bool:
    """Return True when ``node`` is an element carrying class ``name``."""

    if not isinstance(node, Tag):
        return False
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return name in classes


def is_text_run(node: PageElement) -> bool:
    """Return True for character data that counts as visible text.

    Comments, CDATA, doctypes and processing instructions are excluded.
    """

    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


def text_runs(container: PageElement) -> List[NavigableString]:
    """Return the text runs under ``container`` in depth-first order."""

    if is_text_run(container):
        return [container]
    if not isinstance(container, Tag):
        return []
    return [node for node in container.descendants if is_text_run(node)]


def element_text(node: PageElement | None) -> str:
    """Return the concatenated text of ``node``."""

    if node is None:
        return ""
    return "".join(str(run) for run in text_runs(node))


def text_length(node: PageElement | None) -> int:
    """Return the length of ``element_text(node)``."""

    return sum(len(run) for run in text_runs(node)) if node is not None else 0


def element_children(tag: Tag) -> List[Tag]:
    """Return the direct element children of ``tag``."""

    return [child for child in tag.children if isinstance(child, Tag)]


def header_text(section: Tag, selector: str) -> str | None:
    """Return the stripped text of the first element matching ``selector``."""

    header = section.select_one(selector)
    if header is None:
        return None
    return element_text(header).strip()


def owner_soup(node: PageElement) -> BeautifulSoup:
    """Return the document that owns ``node``, or a fresh one when detached."""

    current = node
    while current.parent is not None:
        current = current.parent
    if isinstance(current, BeautifulSoup):
        return current
    return BeautifulSoup("", "html.parser")


def new_page_elements(
    *, container: Tag, number: int, editable: bool = False
) -> tuple[Tag, Tag]:
    """Create and append a page wrapper to ``container``.

    Args:
        container: Pages container receiving the new page.
        number: Page number printed in the footer and used in the page id.
        editable: Whether the content region is marked ``contenteditable``.
    Returns:
        Tuple of (page element, content region).
    """

    soup = owner_soup(container)
    page = soup.new_tag("div")
    page["class"] = [PAGE_CLASS]
    page["id"] = f"page-{number}"
    content = soup.new_tag("div")
    content["class"] = [PAGE_CONTENT_CLASS]
    if editable:
        content["contenteditable"] = "true"
    page.append(content)
    number_el = soup.new_tag("div")
    number_el["class"] = [PAGE_NUMBER_CLASS]
    number_el.string = str(number)
    page.append(number_el)
    container.append(page)
    return page, content


def page_content_of(node: PageElement | None) -> Tag | None:
    """Return the nearest ``div.page-content`` at or above ``node``."""

    current = node
    while current is not None and not has_class(current, PAGE_CONTENT_CLASS):
        current = current.parent
    return current


def find_by_id(root: Tag, element_id: str) -> Tag | None:
    """Return the first element under ``root`` whose id is ``element_id``."""

    return root.find(id=element_id)
