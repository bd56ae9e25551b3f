"""Static pagination: grouping, packing and table of contents."""

from .flow_engine import PageFlow
from .flow_grouping import GroupStep, is_header_only, next_group, widow_header_break
from .flow_packing import PagePacker
from .flow_settings import FlowSettings, parse_length
from .flow_toc import IdRegistry, TocBuilder, render_toc

__all__ = [
    "FlowSettings",
    "GroupStep",
    "IdRegistry",
    "PageFlow",
    "PagePacker",
    "TocBuilder",
    "is_header_only",
    "next_group",
    "parse_length",
    "render_toc",
    "widow_header_break",
]
