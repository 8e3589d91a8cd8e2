"""Pagetext - reading-order text extraction from PDF pages."""

__version__ = "0.1.0"

from .models import DocumentText, PageText, ReconstructionConfig, SortMode, TextFragment
from .reconstruct import extract_text, reconstruct
from .pdf import PageData, PDFDocument, load_pdf

__all__ = [
    "DocumentText",
    "PageText",
    "ReconstructionConfig",
    "SortMode",
    "TextFragment",
    "extract_text",
    "reconstruct",
    "PageData",
    "PDFDocument",
    "load_pdf",
]
