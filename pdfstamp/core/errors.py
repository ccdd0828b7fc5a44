"""
Error types raised by the annotation core.
"""
from typing import Optional


class PdfStampError(Exception):
    """Base class for all pdfstamp errors."""

    error_code = "PDFSTAMP_ERR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class InvalidDocument(PdfStampError):
    """The supplied bytes could not be parsed as a PDF document."""

    error_code = "PDF_INVALID_ERR"


class NotFound(PdfStampError):
    """A store operation referenced an annotation id that is not live."""

    error_code = "ANNOTATION_NOT_FOUND_ERR"

    def __init__(self, annotation_id: str):
        super().__init__(f"No annotation with id {annotation_id!r}")
        self.annotation_id = annotation_id


class DuplicateId(PdfStampError):
    """An annotation with the same id is already in the store."""

    error_code = "ANNOTATION_DUPLICATE_ERR"

    def __init__(self, annotation_id: str):
        super().__init__(f"Annotation id {annotation_id!r} is already in use")
        self.annotation_id = annotation_id


class RenderFailure(PdfStampError):
    """A page could not be rasterized."""

    error_code = "PDF_RENDER_ERR"

    def __init__(self, message: str, page_index: Optional[int] = None):
        super().__init__(message)
        self.page_index = page_index


class ExportFailure(PdfStampError):
    """Compositing annotations into the output document failed."""

    error_code = "PDF_EXPORT_ERR"
