"""
Core logic for pdfstamp: annotations, interaction and PDF I/O.
"""
from .annotations import AnnotationStore, TextAnnotation
from .document import PageRasterizer, PDFExporter, load_document, page_count
from .errors import (
    DuplicateId,
    ExportFailure,
    InvalidDocument,
    NotFound,
    PdfStampError,
    RenderFailure,
)
from .interaction import InteractionSurface

__all__ = [
    'AnnotationStore',
    'TextAnnotation',
    'PageRasterizer',
    'PDFExporter',
    'load_document',
    'page_count',
    'InteractionSurface',
    'PdfStampError',
    'InvalidDocument',
    'NotFound',
    'DuplicateId',
    'RenderFailure',
    'ExportFailure',
]
