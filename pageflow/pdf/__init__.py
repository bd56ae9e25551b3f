"""ReportLab measurement and PDF output for packed pages."""

from .builder import build_pdf
from .pdf_flowables import block_flowables
from .pdf_measure import ReportLabMeasurer
from .pdf_settings import PdfSettings, build_styles

__all__ = [
    "PdfSettings",
    "ReportLabMeasurer",
    "block_flowables",
    "build_pdf",
    "build_styles",
]
