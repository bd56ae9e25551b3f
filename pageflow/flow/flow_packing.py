"""Page packing: assign groups to fixed-height pages in order."""

from __future__ import annotations

import copy
from typing import Callable, List

from bs4 import Tag

from ..models import Group, Page
from ..parser import new_page_elements
from .flow_constants import _debug
from .flow_settings import FlowSettings
from .flow_toc import TocBuilder

PageCreated = Callable[[Tag, int], None]
SectionPlaced = Callable[[Tag, Tag, int], None]


class PagePacker:
    """Places groups onto pages, opening pages on demand.

    Args:
        container: Pages container that receives ``div.page`` elements.
        settings: Flow settings with the page budget and start number.
        toc: TOC builder that records every placed section.
        editable: Whether new content regions are ``contenteditable``.
        on_page_create: Called with (page element, page number).
        on_section_add: Called with (section clone, page element, page number).
    """

    def __init__(
        self,
        *,
        container: Tag,
        settings: FlowSettings,
        toc: TocBuilder,
        editable: bool = False,
        on_page_create: PageCreated | None = None,
        on_section_add: SectionPlaced | None = None,
    ) -> None:
        self.container = container
        self.settings = settings
        self.toc = toc
        self.editable = editable
        self.on_page_create = on_page_create
        self.on_section_add = on_section_add
        self.pages: List[Page] = []
        self.current: Page | None = None
        self.current_fill = 0.0
        self.next_number = settings.page_start_number

    @property
    def page_open(self) -> bool:
        """Return True once a page exists."""

        return self.current is not None

    def reset(self) -> None:
        """Remove every page and restart numbering at the configured start."""

        self.container.clear()
        self.pages = []
        self.current = None
        self.current_fill = 0.0
        self.next_number = self.settings.page_start_number

    def open_page(self) -> Page:
        """Create the next page and make it current.

        Returns:
            The new Page.
        """

        number = self.next_number
        element, content = new_page_elements(
            container=self.container, number=number, editable=self.editable
        )
        page = Page(number=number, element=element, content=content)
        self.pages.append(page)
        self.current = page
        if self.on_page_create is not None:
            self.on_page_create(element, number)
        self.current_fill = 0.0
        self.next_number += 1
        _debug(msg=f"pack: opened page {number}")
        return page

    def break_page(self) -> None:
        """Force a page break unless the current page is still empty."""

        if self.current is None or self.current.sections:
            self.open_page()

    def needs_new_page(self, height: float) -> bool:
        """Return True when a group of ``height`` cannot go on the current page.

        An empty current page always accepts the group, so an oversized group
        overflows its own page instead of leaving a blank one behind.
        """

        if self.current is None:
            return True
        if not self.current.sections:
            return False
        return self.current_fill + height > self.settings.content_height

    def place(self, group: Group) -> Page:
        """Place every section of ``group`` on one page.

        Sections are cloned so the source tree is never modified.

        Args:
            group: Group to place.
        Returns:
            The page that received the group.
        """

        if self.needs_new_page(group.height):
            self.open_page()
        page = self.current
        for section in group.sections:
            clone = copy.copy(section)
            self.toc.record(section=clone, page_number=page.number)
            page.content.append(clone)
            if self.on_section_add is not None:
                self.on_section_add(clone, page.element, page.number)
        self.current_fill += group.height
        page.height = self.current_fill
        _debug(
            msg=(
                f"pack: page {page.number} += {group.height:.1f} "
                f"({self.current_fill:.1f}/{self.settings.content_height:.1f})"
            )
        )
        return page
