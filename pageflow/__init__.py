"""Pagination of sectioned HTML into fixed-height, optionally editable pages."""

from .editor import PageFlowEditor
from .errors import ConfigurationError, PageflowError
from .flow import FlowSettings, PageFlow
from .host import ChangeHub
from .html_output import page_stylesheet, render_document
from .models import Caret, FlowResult, Group, Page, PastePayload, TocEntry
from .parser import parse_html

__all__ = [
    "Caret",
    "ChangeHub",
    "ConfigurationError",
    "FlowResult",
    "FlowSettings",
    "Group",
    "Page",
    "PageFlow",
    "PageFlowEditor",
    "PageflowError",
    "PastePayload",
    "TocEntry",
    "page_stylesheet",
    "parse_html",
    "render_document",
]
