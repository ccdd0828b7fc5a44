"""
Burns text annotations into a copy of a PDF.
"""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from pdfstamp.config import CompositorConfig, FontSizeUnits
from pdfstamp.core.annotations import TextAnnotation
from pdfstamp.core.errors import ExportFailure, PdfStampError
from pdfstamp.core.geometry import display_to_document
from .pdf_reader import DocumentBytes, PDFDocumentHandle, load_document

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class PDFExporter:
    """Handles exporting annotations to PDF documents."""

    def __init__(self, config: Optional[CompositorConfig] = None,
                 loader: Callable[[DocumentBytes], PDFDocumentHandle] = load_document):
        self.config = config or CompositorConfig()
        self._loader = loader

    def drawn_font_size(self, annotation: TextAnnotation, scale: float) -> float:
        """Font size in points used when drawing the annotation."""
        if self.config.font_size_units is FontSizeUnits.DISPLAY:
            return annotation.font_size / scale
        return annotation.font_size

    def export_annotations(self, document_bytes: DocumentBytes,
                           annotations: Iterable[TextAnnotation], scale: float,
                           progress: Optional[ProgressCallback] = None) -> bytes:
        """
        Draw every annotation onto its page and return the new PDF.

        Args:
            document_bytes: Original PDF bytes, left untouched
            annotations: Annotations to draw, positions in display space
            scale: Display scale the positions were captured at
            progress: Optional callback receiving (done, total)

        Returns:
            Bytes of the annotated PDF

        Raises:
            InvalidDocument: If the original bytes are not a readable PDF
            ExportFailure: If drawing or saving fails; nothing is returned
        """
        if scale <= 0:
            raise ExportFailure(f"Invalid display scale {scale}")

        # Take a copy so the caller may keep editing during the export
        annotations = tuple(annotations)
        total = len(annotations)

        handle = self._loader(document_bytes)
        try:
            drawn = 0
            for done, annotation in enumerate(annotations, start=1):
                if self._draw_annotation(handle, annotation, scale):
                    drawn += 1
                if progress is not None:
                    progress(done, total)

            output = handle.serialize(garbage=self.config.garbage, deflate=self.config.deflate)
        except PdfStampError:
            raise
        except Exception as exc:
            logger.error("Export failed: %s", exc)
            raise ExportFailure(f"Failed to export annotations: {exc}") from exc
        finally:
            handle.close()

        logger.info("Exported %d of %d annotations (%d bytes)", drawn, total, len(output))
        return output

    def export_to_file(self, document_bytes: DocumentBytes,
                       annotations: Iterable[TextAnnotation], scale: float,
                       output_path: Union[str, Path],
                       progress: Optional[ProgressCallback] = None) -> Path:
        """
        Export and write the result to disk.

        The file is written to a temporary file in the target directory and
        moved into place, so an existing file is only replaced by a complete
        document.

        Returns:
            Path of the written file
        """
        output_path = Path(output_path)
        data = self.export_annotations(document_bytes, annotations, scale, progress)

        temp_path = None
        try:
            temp_fd, temp_path = tempfile.mkstemp(suffix='.pdf', dir=output_path.parent)
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(data)
            shutil.move(temp_path, output_path)
        except OSError as exc:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)
            raise ExportFailure(f"Could not write {output_path}: {exc}") from exc

        logger.info("Saved annotated PDF to %s", output_path)
        return output_path

    def _draw_annotation(self, handle: PDFDocumentHandle,
                         annotation: TextAnnotation, scale: float) -> bool:
        """Draw a single annotation. Returns False if it was skipped."""
        if not handle.has_page(annotation.page_index):
            # Document may have fewer pages than when the annotation was made
            logger.info("Skipping annotation %s: page %d not in document (%d pages)",
                        annotation.id, annotation.page_index, handle.page_count)
            return False

        page_height = handle.page_size(annotation.page_index).height
        x, y = display_to_document(
            annotation.x,
            annotation.y,
            annotation.font_size,
            scale,
            page_height,
        )

        handle.draw_text(
            annotation.page_index,
            annotation.text,
            x,
            y,
            self.drawn_font_size(annotation, scale),
            self.config.color,
            font_name=self.config.font_name,
        )
        return True
