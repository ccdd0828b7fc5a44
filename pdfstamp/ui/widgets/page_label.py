"""
Page widget showing the rendered page with editable text annotations on top.
"""
from typing import Dict

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont, QImage, QMouseEvent, QPixmap
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QToolButton, QWidget

from pdfstamp.controllers.annotation_controller import AnnotationController
from pdfstamp.core.annotations import TextAnnotation
from pdfstamp.core.document import RenderedPage


def pixmap_from_render(rendered: RenderedPage) -> QPixmap:
    """Convert a PyMuPDF pixmap to a QPixmap."""
    pix = rendered.pixmap
    image_format = QImage.Format_RGBA8888 if pix.alpha else QImage.Format_RGB888
    img = QImage(pix.samples, pix.width, pix.height, pix.stride, image_format)
    return QPixmap.fromImage(img)


class DragHandle(QLabel):
    """Grip shown left of an annotation; dragging it moves the annotation."""

    def __init__(self, annotation_id: str, controller: AnnotationController,
                 surface: QWidget, parent=None):
        super().__init__("✥", parent)
        self.annotation_id = annotation_id
        self.controller = controller
        self.surface = surface
        self.setObjectName("AnnotationHandle")
        self.setFixedSize(18, 18)
        self.setAlignment(Qt.AlignCenter)
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip("Drag to move")

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        if self.controller.begin_drag(self.annotation_id, event.globalPos(), self.surface):
            self.setCursor(Qt.ClosedHandCursor)
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if event.buttons() & Qt.LeftButton:
            self.controller.drag_to(event.globalPos(), self.surface)
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        self.controller.end_drag()
        self.setCursor(Qt.OpenHandCursor)
        event.accept()


class AnnotationBox(QWidget):
    """Drag handle, text input and delete button for one annotation."""

    def __init__(self, annotation: TextAnnotation, controller: AnnotationController,
                 surface: QWidget):
        super().__init__(surface)
        self.annotation_id = annotation.id
        self.controller = controller

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.handle = DragHandle(annotation.id, controller, surface, self)
        layout.addWidget(self.handle)

        self.editor = QLineEdit(annotation.text, self)
        self.editor.setObjectName("AnnotationInput")
        self.editor.setMinimumWidth(50)
        self.editor.textEdited.connect(self._on_text_edited)
        layout.addWidget(self.editor)

        self.delete_button = QToolButton(self)
        self.delete_button.setObjectName("AnnotationDelete")
        self.delete_button.setText("✕")
        self.delete_button.setToolTip("Delete annotation")
        self.delete_button.clicked.connect(self._on_delete_clicked)
        layout.addWidget(self.delete_button)

        self.apply(annotation)

    def apply(self, annotation: TextAnnotation) -> None:
        """Sync position, size and text with the stored record."""
        font = QFont(self.editor.font())
        font.setPixelSize(max(1, int(round(annotation.font_size))))
        self.editor.setFont(font)
        self.editor.setFixedWidth(int(annotation.width))

        # Leave the text alone while the user is typing in it
        if self.editor.text() != annotation.text:
            self.editor.setText(annotation.text)

        self.adjustSize()
        # The input's left edge sits on the annotation's x
        self.move(int(round(annotation.x)) - self.handle.width() - 2,
                  int(round(annotation.y)))

    def focus_editor(self) -> None:
        self.editor.setFocus()
        self.editor.selectAll()

    def _on_text_edited(self, text: str) -> None:
        self.controller.set_text(self.annotation_id, text)

    def _on_delete_clicked(self) -> None:
        self.controller.delete_annotation(self.annotation_id)


class AnnotatedPageLabel(QLabel):
    """
    Rendered page with its annotations.

    Double-click on empty page area creates an annotation. Only annotations
    of the displayed page are shown.
    """

    def __init__(self, controller: AnnotationController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.boxes: Dict[str, AnnotationBox] = {}

        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setCursor(Qt.CrossCursor)

        controller.annotation_added.connect(self._on_added)
        controller.annotation_updated.connect(self._on_updated)
        controller.annotation_removed.connect(self._on_removed)
        controller.page_changed.connect(lambda _: self.rebuild())

    def set_page_pixmap(self, pixmap: QPixmap) -> None:
        """Show a newly rendered page."""
        self.setPixmap(pixmap)
        self.setFixedSize(pixmap.size())

    def rebuild(self) -> None:
        """Recreate annotation widgets for the displayed page."""
        for box in self.boxes.values():
            box.deleteLater()
        self.boxes.clear()

        for annotation in self.controller.visible_annotations():
            self._add_box(annotation)

    def mouseDoubleClickEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton or self.pixmap() is None:
            return super().mouseDoubleClickEvent(event)

        on_annotation = self.childAt(event.pos()) is not None
        self.controller.create_at(event.globalPos(), self, on_annotation)
        event.accept()

    def _add_box(self, annotation: TextAnnotation) -> AnnotationBox:
        box = AnnotationBox(annotation, self.controller, self)
        box.show()
        self.boxes[annotation.id] = box
        return box

    def _on_added(self, annotation: TextAnnotation) -> None:
        if annotation.page_index != self.controller.page_index:
            return
        box = self._add_box(annotation)
        if annotation.text == self.controller.surface.defaults.placeholder_text:
            box.focus_editor()

    def _on_updated(self, annotation: TextAnnotation) -> None:
        box = self.boxes.get(annotation.id)
        if box is not None:
            box.apply(annotation)

    def _on_removed(self, annotation_id: str) -> None:
        box = self.boxes.pop(annotation_id, None)
        if box is not None:
            box.deleteLater()
