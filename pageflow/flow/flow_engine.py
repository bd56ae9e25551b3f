"""Static pagination: group, pack and index sections in one forward pass."""

from __future__ import annotations

import logging
from typing import Callable, List

from bs4 import Tag

from ..errors import ConfigurationError
from ..host import CursorHost, Measurer
from ..models import FlowResult, Page, TocEntry
from ..parser import find_by_id, resolve_element, select_sections
from .flow_grouping import next_group
from .flow_packing import PageCreated, PagePacker, SectionPlaced
from .flow_settings import FlowSettings
from .flow_toc import IdRegistry, TocBuilder, render_toc

logger = logging.getLogger(__name__)

FlowComplete = Callable[[int, List[TocEntry]], None]


class PageFlow:
    """Flows the sections of a content root into fixed-height pages.

    Element arguments accept either a ``bs4.Tag`` or a CSS selector resolved
    against ``root``.

    Args:
        content_source: Element holding the source sections (never modified).
        pages_container: Element that receives the generated pages.
        measurer: Height measurement collaborator.
        settings: Flow settings; defaults to ``FlowSettings()``.
        root: Document used to resolve selector arguments.
        toc_container: Optional element that receives the rendered TOC.
        cursor_host: Optional host used to scroll TOC targets into view.
        on_page_create: Called with (page element, page number).
        on_section_add: Called with (section clone, page element, page number).
        on_complete: Called with (total pages, TOC entries) after a pass.

    Example:
        >>> from pageflow.parser import parse_html
        >>> class Fixed:
        ...     def measure(self, block, width):
        ...         return 100.0
        >>> doc = parse_html('<div id="src"><div class="section"><h2>A</h2></div>'
        ...                  '</div><div id="pages"></div>')
        >>> flow = PageFlow(content_source="#src", pages_container="#pages",
        ...                 measurer=Fixed(), root=doc)
        >>> flow.flow().total_pages
        1
    """

    def __init__(
        self,
        *,
        content_source: Tag | str | None,
        pages_container: Tag | str | None,
        measurer: Measurer,
        settings: FlowSettings | None = None,
        root: Tag | None = None,
        toc_container: Tag | str | None = None,
        cursor_host: CursorHost | None = None,
        on_page_create: PageCreated | None = None,
        on_section_add: SectionPlaced | None = None,
        on_complete: FlowComplete | None = None,
    ) -> None:
        self.settings = settings or FlowSettings()
        self.root = root
        self.content_source = resolve_element(root, content_source)
        self.pages_container = resolve_element(root, pages_container)
        self.toc_container = resolve_element(root, toc_container)
        self.measurer = measurer
        self.cursor_host = cursor_host
        self.on_complete = on_complete
        self.registry = IdRegistry()
        self.toc = TocBuilder(settings=self.settings, registry=self.registry)
        self.packer: PagePacker | None = None
        if self.pages_container is not None:
            self.packer = PagePacker(
                container=self.pages_container,
                settings=self.settings,
                toc=self.toc,
                on_page_create=on_page_create,
                on_section_add=on_section_add,
            )

    @property
    def pages(self) -> List[Page]:
        """Return the pages built by the most recent pass."""

        return self.packer.pages if self.packer is not None else []

    @property
    def toc_items(self) -> List[TocEntry]:
        """Return TOC entries from the most recent pass."""

        return self.toc.entries

    def flow(self) -> FlowResult | None:
        """Paginate every source section and build the TOC.

        Returns:
            FlowResult, or None when a required element is missing. The
            problem is logged and no pages are created in that case.
        """

        try:
            self._require_elements()
        except ConfigurationError as exc:
            logger.error("pageflow: %s", exc)
            return None
        packer = self.packer
        packer.reset()
        self.toc.reset()
        sections = select_sections(self.content_source, self.settings.section_selector)
        self.toc.reserve(sections)
        index = 0
        while index < len(sections):
            step = next_group(
                sections=sections,
                index=index,
                current_fill=packer.current_fill,
                page_open=packer.page_open,
                measurer=self.measurer,
                settings=self.settings,
            )
            if step.break_before:
                packer.break_page()
            packer.place(step.group)
            index = step.next_index
        self.render_toc()
        result = FlowResult(total_pages=len(packer.pages), toc_items=list(self.toc_items))
        logger.debug(
            "pageflow: %d sections on %d pages", len(sections), result.total_pages
        )
        if self.on_complete is not None:
            self.on_complete(result.total_pages, result.toc_items)
        return result

    def render_toc(self) -> None:
        """Write the TOC into the TOC container when one is configured."""

        if self.settings.generate_toc and self.toc_container is not None:
            render_toc(entries=self.toc_items, container=self.toc_container)

    def follow_toc_link(self, href: str) -> bool:
        """Smooth-scroll to the section a TOC link points at.

        Args:
            href: Link target such as ``"#intro"``.
        Returns:
            True when the target exists and a cursor host scrolled to it.
        """

        if self.pages_container is None or self.cursor_host is None:
            return False
        target = find_by_id(self.pages_container, href.lstrip("#"))
        if target is None:
            return False
        self.cursor_host.scroll_into_view(target, behavior="smooth", block="start")
        return True

    def _require_elements(self) -> None:
        """Raise ConfigurationError when a required element is missing."""

        missing = [
            name
            for name, element in (
                ("content_source", self.content_source),
                ("pages_container", self.pages_container),
            )
            if element is None
        ]
        if missing:
            raise ConfigurationError(
                "required elements are missing", details=", ".join(missing)
            )
