"""Editable pagination with debounced reflow and caret preservation."""

from .editor import PageFlowEditor
from .editor_cursor import (
    CursorCodec,
    end_position,
    is_at_start_of_content,
    position_from_offset,
    text_offset,
)
from .editor_detect import content_height, needs_reflow
from .editor_schedule import AsyncioScheduler, Debouncer

__all__ = [
    "AsyncioScheduler",
    "CursorCodec",
    "Debouncer",
    "PageFlowEditor",
    "content_height",
    "end_position",
    "is_at_start_of_content",
    "needs_reflow",
    "position_from_offset",
    "text_offset",
]
