"""
PDF document loading and page rendering.
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import fitz  # PyMuPDF

from pdfstamp.config import RasterizerConfig
from pdfstamp.core.errors import InvalidDocument, RenderFailure
from pdfstamp.core.geometry import flip_y

logger = logging.getLogger(__name__)

DocumentBytes = Union[bytes, bytearray, memoryview]

# Exceptions PyMuPDF raises for unreadable input (FileDataError and
# EmptyFileError derive from RuntimeError)
_FITZ_OPEN_ERRORS = (RuntimeError, ValueError, TypeError)


@dataclass(frozen=True)
class PageSize:
    """Intrinsic page size in points."""
    width: float
    height: float


@dataclass(frozen=True)
class RenderedPage:
    """A page rasterized at a given display scale."""
    pixmap: fitz.Pixmap
    page_index: int
    scale: float
    display_width: float
    display_height: float
    intrinsic_width: float
    intrinsic_height: float


class PDFDocumentHandle:
    """
    Thin wrapper over a PyMuPDF document exposing the drawing operations
    used when compositing.

    Coordinates passed to :meth:`draw_text` are document coordinates with
    the origin at the bottom-left of the page.
    """

    def __init__(self, doc: fitz.Document):
        self.doc = doc

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def has_page(self, page_index: int) -> bool:
        return 0 <= page_index < self.doc.page_count

    def page_size(self, page_index: int) -> PageSize:
        """
        Get the size of a page in points.

        Args:
            page_index: 0-based index of the page

        Returns:
            PageSize of the page rectangle, the same area the rasterizer
            renders
        """
        rect = self.doc.load_page(page_index).rect
        return PageSize(rect.width, rect.height)

    def draw_text(self, page_index: int, text: str, x: float, y: float,
                  font_size: float, color: Tuple[float, float, float],
                  font_name: str = "helv") -> None:
        """
        Draw a line of text into the page content.

        Args:
            page_index: 0-based page index
            text: Text to draw
            x: Baseline start X in document space
            y: Baseline Y in document space (origin bottom-left)
            font_size: Font size in points
            color: RGB colour, components in 0-1
            font_name: PDF font name
        """
        page = self.doc.load_page(page_index)
        # PyMuPDF measures Y from the top of the page
        baseline = fitz.Point(x, flip_y(y, page.rect.height))
        page.insert_text(
            baseline,
            text,
            fontsize=font_size,
            fontname=font_name,
            color=color,
        )

    def serialize(self, garbage: int = 4, deflate: bool = True) -> bytes:
        """Write the document to a new byte buffer."""
        return self.doc.tobytes(garbage=garbage, deflate=deflate)

    def close(self) -> None:
        if not self.doc.is_closed:
            self.doc.close()

    def __enter__(self) -> "PDFDocumentHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def load_document(document_bytes: DocumentBytes) -> PDFDocumentHandle:
    """
    Open a PDF from memory.

    Args:
        document_bytes: Raw PDF bytes

    Returns:
        PDFDocumentHandle wrapping the opened document

    Raises:
        InvalidDocument: If the bytes are empty or not a readable PDF
    """
    if not document_bytes:
        raise InvalidDocument("Document is empty")

    try:
        doc = fitz.open(stream=bytes(document_bytes), filetype="pdf")
    except _FITZ_OPEN_ERRORS as exc:
        raise InvalidDocument(f"Cannot open PDF: {exc}") from exc

    if not doc.is_pdf:
        doc.close()
        raise InvalidDocument("Input is not a PDF document")

    return PDFDocumentHandle(doc)


def page_count(document_bytes: DocumentBytes) -> int:
    """
    Count the pages of a PDF.

    Raises:
        InvalidDocument: If the bytes are not a readable PDF
    """
    with load_document(document_bytes) as handle:
        return handle.page_count


def read_pdf_bytes(file_path: Union[str, Path]) -> bytes:
    """Read a PDF file from disk and check that it opens."""
    data = Path(file_path).read_bytes()
    # Fail early with InvalidDocument rather than on first render
    page_count(data)
    return data


class PageRasterizer:
    """
    Renders document pages to pixmaps at a display scale.

    The opened document is kept for as long as the same byte buffer is
    passed in, and the last few renders are cached.
    """

    def __init__(self, config: Optional[RasterizerConfig] = None):
        self.config = config or RasterizerConfig()
        self._source: Optional[DocumentBytes] = None
        self._handle: Optional[PDFDocumentHandle] = None
        self._pixmap_cache: Dict[Tuple[int, float], RenderedPage] = {}

    def rasterize(self, document_bytes: DocumentBytes, page_index: int,
                  scale: float) -> RenderedPage:
        """
        Render a single page.

        Args:
            document_bytes: Raw PDF bytes
            page_index: 0-based index of the page to render
            scale: Display scale, 1.0 renders one pixel per point

        Returns:
            RenderedPage with the pixmap and its display and intrinsic sizes

        Raises:
            RenderFailure: If the document or page cannot be rendered
        """
        if scale <= 0:
            raise RenderFailure(f"Invalid render scale {scale}", page_index)

        handle = self._open(document_bytes, page_index)

        if not handle.has_page(page_index):
            raise RenderFailure(
                f"Page index {page_index} out of range (0-{handle.page_count - 1})",
                page_index,
            )

        cache_key = (page_index, scale)
        if cache_key in self._pixmap_cache:
            return self._pixmap_cache[cache_key]

        try:
            page = handle.doc.load_page(page_index)
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=self.config.alpha)
            if self.config.dark_mode:
                pix.invert_irect(pix.irect)
        except RuntimeError as exc:
            raise RenderFailure(f"Error rendering page {page_index + 1}: {exc}",
                                page_index) from exc

        rect = page.rect
        rendered = RenderedPage(
            pixmap=pix,
            page_index=page_index,
            scale=scale,
            display_width=rect.width * scale,
            display_height=rect.height * scale,
            intrinsic_width=rect.width,
            intrinsic_height=rect.height,
        )

        self._pixmap_cache[cache_key] = rendered
        if len(self._pixmap_cache) > self.config.cache_size:
            # Remove oldest entry
            oldest_key = next(iter(self._pixmap_cache))
            del self._pixmap_cache[oldest_key]

        logger.debug("Rendered page %d at scale %.2f (%dx%d px)",
                     page_index, scale, pix.width, pix.height)
        return rendered

    def page_count(self, document_bytes: DocumentBytes) -> int:
        """Page count of the document, reusing the open handle if possible."""
        try:
            return self._open(document_bytes, None).page_count
        except RenderFailure as exc:
            raise InvalidDocument(exc.message) from exc

    def set_dark_mode(self, enabled: bool) -> None:
        """Switch page colour inversion; cached renders are dropped."""
        if enabled == self.config.dark_mode:
            return
        self.config = replace(self.config, dark_mode=enabled)
        self._pixmap_cache.clear()

    def close(self) -> None:
        """Release the open document and cached renders."""
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._source = None
        self._pixmap_cache.clear()

    def _open(self, document_bytes: DocumentBytes,
              page_index: Optional[int]) -> PDFDocumentHandle:
        if self._handle is not None and document_bytes is self._source:
            return self._handle

        self.close()
        try:
            self._handle = load_document(document_bytes)
        except InvalidDocument as exc:
            raise RenderFailure(exc.message, page_index) from exc
        self._source = document_bytes
        return self._handle
