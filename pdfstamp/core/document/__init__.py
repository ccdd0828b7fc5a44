"""
PDF document handling and manipulation.
"""
from .pdf_reader import (
    PageRasterizer,
    PageSize,
    PDFDocumentHandle,
    RenderedPage,
    load_document,
    page_count,
    read_pdf_bytes,
)
from .pdf_exporter import PDFExporter

__all__ = [
    'PageRasterizer',
    'PageSize',
    'PDFDocumentHandle',
    'RenderedPage',
    'load_document',
    'page_count',
    'read_pdf_bytes',
    'PDFExporter',
]
