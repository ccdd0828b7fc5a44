# core/export/export_worker.py

import logging

from PyQt5.QtCore import QThread, pyqtSignal

from pdfstamp.core.document.pdf_exporter import PDFExporter
from pdfstamp.core.errors import PdfStampError

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    """Worker thread for exporting annotations to PDF without freezing the UI."""

    # Signals
    finished = pyqtSignal(bool, str)  # success, message
    progress = pyqtSignal(str)  # status message
    annotation_progress = pyqtSignal(int, int)  # current, total annotations

    def __init__(self, document_bytes, output_path, annotations, scale, exporter=None):
        super().__init__()
        self.document_bytes = document_bytes
        self.output_path = output_path
        # Snapshot, the store keeps changing while we run
        self.annotations = tuple(annotations)
        self.scale = scale
        self.exporter = exporter or PDFExporter()

    def run(self):
        """Execute the export in a background thread."""
        try:
            self.progress.emit("Exporting annotations...")
            self.exporter.export_to_file(
                self.document_bytes,
                self.annotations,
                self.scale,
                self.output_path,
                progress=self.annotation_progress.emit,
            )
            self.finished.emit(True, "Annotations saved successfully to PDF!")
        except PdfStampError as e:
            logger.error("Export to %s failed: %s", self.output_path, e)
            self.finished.emit(False, f"Error during export: {e.message}")
        except Exception as e:
            # The progress dialog waits for finished, it must always be sent
            logger.exception("Unexpected error exporting to %s", self.output_path)
            self.finished.emit(False, f"Error during export: {e}")
