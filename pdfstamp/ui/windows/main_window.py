import logging
import os
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFileDialog,
    QScrollArea, QLineEdit, QFrame, QMessageBox, QSpacerItem, QSizePolicy,
    QToolButton, QProgressDialog, QShortcut
)

from pdfstamp.config import AppConfig
from pdfstamp.controllers.annotation_controller import AnnotationController
from pdfstamp.core.annotations import AnnotationStore
from pdfstamp.core.document import PageRasterizer, PDFExporter, RenderedPage, read_pdf_bytes
from pdfstamp.core.errors import InvalidDocument, RenderFailure
from pdfstamp.core.export.export_worker import ExportWorker
from pdfstamp.core.interaction import InteractionSurface
from pdfstamp.styles import ThemeManager
from pdfstamp.ui.widgets.page_label import AnnotatedPageLabel, pixmap_from_render

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[AppConfig] = None, file_path=None):
        super().__init__()
        self.setWindowTitle("pdfstamp[*]")

        self.config = config or AppConfig()
        self.scale = self.config.scale
        self.dark_mode = self.config.rasterizer.dark_mode

        self.document_bytes: Optional[bytes] = None
        self.file_path: Optional[str] = None
        self.total_pages = 0

        self.rasterizer = PageRasterizer(self.config.rasterizer)
        self.exporter = PDFExporter(self.config.compositor)
        self.store = AnnotationStore()
        self.surface = InteractionSurface(self.store, defaults=self.config.editor)
        self.controller = AnnotationController(self.surface, self)
        self.controller.annotations_changed.connect(self._on_annotations_changed)
        self.export_worker: Optional[ExportWorker] = None

        self.setup_ui()
        self.setup_shortcuts()
        ThemeManager.apply_theme(self, self.dark_mode)

        if file_path:
            self.load_pdf(file_path)

    def setup_ui(self):
        # TOP TOOLBAR
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        self.open_button = self._tool_button("Open", "Open PDF (Ctrl+O)", self.open_pdf)
        self.close_button = self._tool_button("Close", "Close PDF (Ctrl+W)", self.close_pdf)

        self.file_name_label = QLabel("No PDF Loaded", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold; color: #8899AA;")
        self.top_layout.addWidget(self.file_name_label)

        self.top_layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        # Page controls
        self.prev_button = self._tool_button("◀", "Previous page", lambda: self.go_to_page(self.surface.page_index - 1))
        self.page_edit = QLineEdit("1", self.top_frame)
        self.page_edit.setObjectName("page_input")
        self.page_edit.setAlignment(Qt.AlignCenter)
        self.page_edit.returnPressed.connect(self.page_number_changed)
        self.top_layout.addWidget(self.page_edit)
        self.total_page_label = QLabel("/ 0", self.top_frame)
        self.top_layout.addWidget(self.total_page_label)
        self.next_button = self._tool_button("▶", "Next page", lambda: self.go_to_page(self.surface.page_index + 1))

        self.top_layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        self.hint_label = QLabel("Double-click the page to add text", self.top_frame)
        self.hint_label.setObjectName("statusLabel")
        self.top_layout.addWidget(self.hint_label)

        self.save_button = self._tool_button("Export", "Export annotated PDF (Ctrl+S)", self.save_annotations_to_pdf)
        self.toggle_button = self._tool_button("Theme", "Toggle Dark Mode", self.toggle_mode)

        # PAGE DISPLAY AREA
        self.page_label = AnnotatedPageLabel(self.controller)
        self.page_container = QWidget()
        container_layout = QVBoxLayout(self.page_container)
        container_layout.setContentsMargins(0, 30, 0, 30)
        container_layout.addWidget(self.page_label, 0, Qt.AlignHCenter | Qt.AlignTop)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.page_container)

        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(self.scroll_area)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self._update_controls()

    def setup_shortcuts(self):
        QShortcut(QKeySequence(QKeySequence.Open), self, activated=self.open_pdf)
        QShortcut(QKeySequence(QKeySequence.Close), self, activated=self.close_pdf)
        QShortcut(QKeySequence(QKeySequence.Save), self, activated=self.save_annotations_to_pdf)

    def _tool_button(self, text, tooltip, slot):
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(slot)
        self.top_layout.addWidget(btn)
        return btn

    def _update_controls(self):
        loaded = self.document_bytes is not None
        for widget in (self.close_button, self.prev_button, self.next_button,
                       self.page_edit, self.save_button):
            widget.setEnabled(loaded)
        if loaded:
            self.prev_button.setEnabled(self.surface.page_index > 0)
            self.next_button.setEnabled(self.surface.page_index < self.total_pages - 1)

    # Document lifecycle

    def open_pdf(self):
        if not self._confirm_discard():
            return
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path) -> bool:
        try:
            document_bytes = read_pdf_bytes(file_path)
        except (OSError, InvalidDocument) as e:
            logger.error("Could not open %s: %s", file_path, e)
            QMessageBox.critical(self, "Error", f"Error loading PDF: {e}")
            return False

        self.rasterizer.close()
        self.document_bytes = document_bytes
        self.file_path = file_path
        self.total_pages = self.rasterizer.page_count(document_bytes)
        self.file_name_label.setText(os.path.basename(file_path))
        self.total_page_label.setText(f"/ {self.total_pages}")
        logger.info("Opened %s (%d pages)", file_path, self.total_pages)

        self.controller.reset(0)
        self.page_label.clear()
        self.render_current_page()
        return True

    def close_pdf(self):
        if not self._confirm_discard():
            return
        self.rasterizer.close()
        self.document_bytes = None
        self.file_path = None
        self.total_pages = 0
        self.controller.reset(0)
        self.page_label.clear()
        self.page_label.rebuild()
        self.file_name_label.setText("No PDF Loaded")
        self.total_page_label.setText("/ 0")
        self.page_edit.setText("1")
        self._update_controls()

    def render_current_page(self):
        """Re-render the displayed page; on failure the previous render stays."""
        if self.document_bytes is None:
            return
        page_index = self.surface.page_index
        try:
            rendered = self._rasterize(page_index)
        except RenderFailure as e:
            self._show_render_error(page_index, e)
            return
        self._display(rendered)

    def go_to_page(self, page_index: int):
        if not 0 <= page_index < self.total_pages:
            return
        try:
            # Render first so a failure leaves page and preview in step
            rendered = self.controller.show_page(page_index, self._rasterize)
        except RenderFailure as e:
            self._show_render_error(page_index, e)
            return
        self._display(rendered)

    def _rasterize(self, page_index: int) -> RenderedPage:
        return self.rasterizer.rasterize(self.document_bytes, page_index, self.scale)

    def _display(self, rendered: RenderedPage):
        self.page_label.set_page_pixmap(pixmap_from_render(rendered))
        self.page_label.rebuild()
        self.page_edit.setText(str(rendered.page_index + 1))
        self._update_controls()

    def _show_render_error(self, page_index: int, error: RenderFailure):
        logger.error("Render failed: %s", error)
        QMessageBox.critical(self, "Error", f"Error rendering page {page_index + 1}: {error.message}")

    def page_number_changed(self):
        try:
            page_index = int(self.page_edit.text()) - 1
        except ValueError:
            page_index = -1
        if 0 <= page_index < self.total_pages:
            self.go_to_page(page_index)
        else:
            self.page_edit.setText(str(self.surface.page_index + 1))

    def toggle_mode(self):
        self.dark_mode = not self.dark_mode
        ThemeManager.apply_theme(self, self.dark_mode)
        # Page colours follow the theme
        self.rasterizer.set_dark_mode(self.dark_mode)
        self.render_current_page()

    def _on_annotations_changed(self):
        self.setWindowModified(self.controller.has_unsaved_changes)

    # Export

    def save_annotations_to_pdf(self):
        """Save annotations to PDF file using background thread."""
        if self.document_bytes is None:
            QMessageBox.warning(self, "No PDF", "No PDF document is currently loaded.")
            return False

        if self.controller.annotation_count() == 0:
            QMessageBox.information(self, "No Annotations", "There are no annotations to save.")
            return False

        base, _ = os.path.splitext(self.file_path)
        output_path, _ = QFileDialog.getSaveFileName(
            self, "Save Annotated PDF", f"{base}_annotated.pdf", "PDF Files (*.pdf)"
        )
        if not output_path:
            return False

        progress = QProgressDialog("Preparing to export annotations...", None, 0, 100, self)
        progress.setWindowTitle("Saving PDF")
        progress.setWindowModality(Qt.WindowModal)
        progress.setMinimumDuration(0)
        progress.setCancelButton(None)  # No cancel button - operation must complete
        progress.setAutoClose(False)
        progress.setAutoReset(False)
        progress.show()

        self.export_worker = ExportWorker(
            self.document_bytes,
            output_path,
            self.store.snapshot(),
            self.scale,
            exporter=self.exporter,
        )

        def on_annotation_progress(current, total):
            if total > 0:
                progress.setValue(int((current / total) * 100))
                progress.setLabelText(f"Drawing annotations: {current}/{total}")

        def on_finished(success, message):
            progress.close()
            if success:
                self.controller.mark_saved()
                self.setWindowModified(False)
                QMessageBox.information(self, "Success", message)
            else:
                QMessageBox.critical(self, "Save Failed", message)
            self.export_worker.deleteLater()
            self.export_worker = None

        self.export_worker.progress.connect(progress.setLabelText)
        self.export_worker.annotation_progress.connect(on_annotation_progress)
        self.export_worker.finished.connect(on_finished)
        self.export_worker.start()
        return True

    def _confirm_discard(self) -> bool:
        """Ask before dropping unsaved annotations. Returns True to proceed."""
        if not self.controller.has_unsaved_changes:
            return True
        reply = QMessageBox.question(
            self,
            "Unsaved Changes",
            "You have annotations that were not exported. Discard them?",
            QMessageBox.Discard | QMessageBox.Cancel,
            QMessageBox.Cancel
        )
        return reply == QMessageBox.Discard

    def closeEvent(self, event):
        """Handle window close event - check for unsaved changes."""
        if self._confirm_discard():
            self.rasterizer.close()
            event.accept()
        else:
            event.ignore()
