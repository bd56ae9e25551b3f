"""Shared fakes and fixtures for the pagination tests.

The engine talks to its host only through the protocols in
``pageflow.host``; these fixtures provide in-memory versions of each:

* ``HeightMeasurer`` reads block heights from ``data-height`` attributes.
* ``FakeCursorHost`` stores the caret and records scroll requests.
* ``ManualScheduler`` queues debounced calls until a test fires them.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

import pytest
from bs4 import BeautifulSoup, PageElement, Tag

from pageflow.flow import FlowSettings
from pageflow.models import Caret
from pageflow.parser import element_children, parse_html


class HeightMeasurer:
    """Measurer that trusts ``data-height`` and sums children without one."""

    def __init__(self) -> None:
        self.calls = 0

    def measure(self, block: Tag, width: float) -> float:
        self.calls += 1
        explicit = block.get("data-height")
        if explicit is not None:
            return float(explicit)
        return sum(self.measure(child, width) for child in element_children(block))


class FakeCursorHost:
    """Cursor host backed by a plain attribute."""

    def __init__(self) -> None:
        self.caret: Caret | None = None
        self.scrolls: List[Tuple[PageElement, str, str]] = []

    def get_caret(self) -> Caret | None:
        return self.caret

    def set_caret(self, node: PageElement, offset: int) -> None:
        self.caret = Caret(node=node, offset=offset)

    def scroll_into_view(
        self, node: PageElement, *, behavior: str = "auto", block: str = "nearest"
    ) -> None:
        self.scrolls.append((node, behavior, block))


class _Handle:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose calls run only when ``fire`` is invoked."""

    def __init__(self) -> None:
        self.handles: List[_Handle] = []
        self.delays: List[float] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Handle:
        handle = _Handle(callback)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle

    @property
    def pending(self) -> List[_Handle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def fire(self) -> int:
        """Run every live call once and return how many ran."""

        live = self.pending
        self.handles = []
        for handle in live:
            handle.callback()
        return len(live)


def section_html(
    height: float,
    *,
    header: str | None = None,
    sub_header: str | None = None,
    text: str = "",
    attrs: str = "",
) -> str:
    """Return the markup of one ``div.section`` with a fixed height."""

    parts = []
    if header is not None:
        parts.append(f"<h2>{header}</h2>")
    if sub_header is not None:
        parts.append(f"<h3>{sub_header}</h3>")
    if text:
        parts.append(f"<p>{text}</p>")
    extra = f" {attrs}" if attrs else ""
    return f'<div class="section" data-height="{height:g}"{extra}>{"".join(parts)}</div>'


def document(sections: Iterable[str]) -> BeautifulSoup:
    """Return a document with a source root, a TOC container and pages."""

    return parse_html(
        '<div id="source">'
        + "".join(sections)
        + '</div><nav id="toc"></nav><div id="pages"></div>'
    )


@pytest.fixture
def measurer() -> HeightMeasurer:
    return HeightMeasurer()


@pytest.fixture
def cursor_host() -> FakeCursorHost:
    return FakeCursorHost()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def settings() -> FlowSettings:
    """A 600px content budget with no padding and an 800px measure."""

    return FlowSettings(
        page_width=800.0,
        page_height=600.0,
        padding_top=0.0,
        padding_bottom=0.0,
        padding_left=0.0,
        padding_right=0.0,
    )
