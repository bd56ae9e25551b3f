"""Section grouping: header/body pairing and the widow-header guard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from bs4 import Tag

from ..host import Measurer
from ..models import Group
from .flow_constants import WIDOW_HEADER_RATIO, _debug
from .flow_settings import FlowSettings


@dataclass(slots=True)
class GroupStep:
    """Outcome of one grouping step.

    Args:
        group: Sections to place together.
        next_index: Index of the first section not consumed by ``group``.
        break_before: Whether a page break is forced before placing ``group``.
    """

    group: Group
    next_index: int
    break_before: bool = False


def has_header(*, section: Tag, settings: FlowSettings) -> bool:
    """Return True when ``section`` contains a primary header."""

    return section.select_one(settings.header_selector) is not None


def is_header_only(*, section: Tag, height: float, settings: FlowSettings) -> bool:
    """Return True for a short section that holds a header and little else.

    Args:
        section: Section to inspect.
        height: Measured height of ``section``.
        settings: Flow settings with the header threshold.
    Returns:
        True when the section has a header and is shorter than the threshold.
    """

    if not has_header(section=section, settings=settings):
        return False
    return height < settings.header_only_threshold


def widow_header_break(
    *, height: float, current_fill: float, settings: FlowSettings
) -> bool:
    """Return True when a header section would start too close to the page end.

    Both conditions must hold: the space left after the section is below the
    minimum-content threshold and below 30% of the section's own height.

    Args:
        height: Measured height of the header section.
        current_fill: Height already used on the open page.
        settings: Flow settings with the page budget and threshold.
    Returns:
        True when a page break should be forced before the section.
    """

    remaining = settings.content_height - current_fill - height
    return (
        remaining < settings.min_content_after_header
        and remaining < height * WIDOW_HEADER_RATIO
    )


def next_group(
    *,
    sections: Sequence[Tag],
    index: int,
    current_fill: float,
    page_open: bool,
    measurer: Measurer,
    settings: FlowSettings,
) -> GroupStep:
    """Return the next group to place starting at ``sections[index]``.

    Args:
        sections: Source sections in document order.
        index: Index of the first unplaced section.
        current_fill: Height already used on the open page.
        page_open: Whether a page currently exists.
        measurer: Height measurement collaborator.
        settings: Flow settings.
    Returns:
        GroupStep describing the group and how far to advance.
    """

    section = sections[index]
    width = settings.content_width
    height = measurer.measure(section, width)
    if is_header_only(section=section, height=height, settings=settings) and (
        index + 1 < len(sections)
    ):
        following = sections[index + 1]
        combined = height + measurer.measure(following, width)
        _debug(msg=f"group: header-only section {index} joined with {index + 1}")
        return GroupStep(
            group=Group(sections=[section, following], height=combined),
            next_index=index + 2,
        )
    break_before = False
    if page_open and has_header(section=section, settings=settings):
        break_before = widow_header_break(
            height=height, current_fill=current_fill, settings=settings
        )
        if break_before:
            _debug(msg=f"group: widow header guard breaks before section {index}")
    return GroupStep(
        group=Group.single(section, height),
        next_index=index + 1,
        break_before=break_before,
    )
