"""Table-of-contents records, anchor ids and TOC markup."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from bs4 import Tag

from ..cleaning import slugify
from ..models import TocEntry
from ..parser import header_text, owner_soup
from .flow_settings import FlowSettings

TOC_TITLE_ATTR = "data-toc"
TOC_INDENT_ATTR = "data-toc-indent"
_FALLBACK_SLUG = "section"


class IdRegistry:
    """Anchor ids handed out by one engine; never shrinks.

    Example:
        >>> registry = IdRegistry()
        >>> registry.generate("Intro"), registry.generate("Intro")
        ('intro', 'intro-1')
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def register(self, value: object) -> None:
        """Reserve an id a section already carries."""

        if value:
            self._ids.add(str(value))

    def generate(self, text: str) -> str:
        """Return a unique slug for ``text`` and register it."""

        base = slugify(text) or _FALLBACK_SLUG
        candidate = base
        counter = 1
        while candidate in self._ids:
            candidate = f"{base}-{counter}"
            counter += 1
        self._ids.add(candidate)
        return candidate


def toc_title(*, section: Tag, settings: FlowSettings) -> str | None:
    """Return the TOC title for ``section`` or None when it has none.

    The ``data-toc`` attribute wins, then the primary header text, then the
    sub-header text.
    """

    explicit = section.get(TOC_TITLE_ATTR)
    if explicit:
        return str(explicit)
    title = header_text(section, settings.header_selector)
    if title is None:
        title = header_text(section, settings.sub_header_selector)
    return title or None


def should_indent(*, section: Tag, settings: FlowSettings) -> bool:
    """Return True when ``section`` is a sub-entry in the TOC.

    An explicit ``data-toc-indent`` attribute decides; otherwise a section
    with a sub-header and no primary header is indented.
    """

    explicit = section.get(TOC_INDENT_ATTR)
    if explicit is not None:
        return str(explicit).strip().lower() == "true"
    if section.select_one(settings.header_selector) is not None:
        return False
    return section.select_one(settings.sub_header_selector) is not None


class TocBuilder:
    """Collects TOC entries as sections are placed.

    Args:
        settings: Flow settings with header selectors.
        registry: Generated-id registry owned by the engine.
    """

    def __init__(self, *, settings: FlowSettings, registry: IdRegistry) -> None:
        self.settings = settings
        self.registry = registry
        self.entries: List[TocEntry] = []

    def reset(self) -> None:
        """Drop collected entries before a new pass."""

        self.entries = []

    def reserve(self, sections: Iterable[Tag]) -> None:
        """Register the ids ``sections`` already carry so slugs avoid them."""

        for section in sections:
            self.registry.register(section.get("id"))

    def record(self, *, section: Tag, page_number: int) -> TocEntry | None:
        """Assign an anchor id if needed and append a TOC entry.

        Args:
            section: Placed section clone; receives a generated id when it has
                a title and no id.
            page_number: Number of the page holding the section.
        Returns:
            The appended entry, or None for untitled sections.
        """

        title = toc_title(section=section, settings=self.settings)
        if title is None:
            return None
        section_id = section.get("id")
        if section_id:
            self.registry.register(section_id)
        else:
            section_id = self.registry.generate(title)
            section["id"] = section_id
        entry = TocEntry(
            title=title,
            id=str(section_id),
            page=page_number,
            indent=should_indent(section=section, settings=self.settings),
        )
        self.entries.append(entry)
        return entry


def render_toc(*, entries: Sequence[TocEntry], container: Tag) -> None:
    """Replace ``container`` children with linked TOC entries.

    Each entry becomes ``a.toc-entry`` with title, dotted leader and page
    number spans.

    Args:
        entries: TOC entries in placement order.
        container: Element receiving the entries.
    Returns:
        None.
    """

    soup = owner_soup(container)
    container.clear()
    for entry in entries:
        link = soup.new_tag("a", href=f"#{entry.id}")
        link["class"] = ["toc-entry", "indent"] if entry.indent else ["toc-entry"]
        for css_class, text in (
            ("toc-text", entry.title),
            ("toc-dots", None),
            ("toc-page-num", str(entry.page)),
        ):
            span = soup.new_tag("span")
            span["class"] = [css_class]
            if text is not None:
                span.string = text
            link.append(span)
        container.append(link)
