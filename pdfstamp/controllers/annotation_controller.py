"""
Controller connecting the interaction surface to Qt widgets.
"""
from typing import Any, Callable, List, Optional

from PyQt5.QtCore import QObject, QPoint, pyqtSignal
from PyQt5.QtWidgets import QWidget

from pdfstamp.core.annotations import AnnotationStore, TextAnnotation
from pdfstamp.core.geometry import Point
from pdfstamp.core.interaction import InteractionSurface, SurfaceEvent, SurfaceEventType


def to_point(pos: QPoint) -> Point:
    """Convert a Qt point to a core Point."""
    return Point(float(pos.x()), float(pos.y()))


class AnnotationController(QObject):
    """Handles annotation operations coming from the page widgets."""

    # Signals
    annotation_added = pyqtSignal(object)  # TextAnnotation
    annotation_updated = pyqtSignal(object)  # TextAnnotation
    annotation_removed = pyqtSignal(str)  # annotation id
    page_changed = pyqtSignal(int)
    annotations_changed = pyqtSignal()  # Emitted on any change

    def __init__(self, surface: InteractionSurface, parent: QWidget = None):
        super().__init__(parent)
        self.surface = surface
        self.has_unsaved_changes = False
        self.surface.add_listener(self._on_surface_event)

    @property
    def store(self) -> AnnotationStore:
        return self.surface.store

    @property
    def page_index(self) -> int:
        return self.surface.page_index

    def _on_surface_event(self, event: SurfaceEvent) -> None:
        if event.event_type is SurfaceEventType.PAGE_CHANGED:
            self.page_changed.emit(event.page_index)
            return

        self.has_unsaved_changes = True
        if event.event_type is SurfaceEventType.ADDED:
            self.annotation_added.emit(event.annotation)
        elif event.event_type is SurfaceEventType.UPDATED:
            self.annotation_updated.emit(event.annotation)
        elif event.event_type is SurfaceEventType.REMOVED:
            self.annotation_removed.emit(event.annotation_id)
        self.annotations_changed.emit()

    # Pointer input, positions in global screen coordinates

    def create_at(self, global_pos: QPoint, surface: QWidget,
                  on_annotation: bool = False) -> Optional[TextAnnotation]:
        """Create an annotation where the page surface was double-clicked."""
        return self.surface.double_click(
            to_point(global_pos), self._origin_of(surface), on_annotation
        )

    def begin_drag(self, annotation_id: str, global_pos: QPoint, surface: QWidget) -> bool:
        return self.surface.pointer_down(annotation_id, to_point(global_pos), self._origin_of(surface))

    def drag_to(self, global_pos: QPoint, surface: QWidget) -> Optional[TextAnnotation]:
        return self.surface.pointer_move(to_point(global_pos), self._origin_of(surface))

    def end_drag(self) -> None:
        self.surface.pointer_up()

    # Editing

    def set_text(self, annotation_id: str, text: str) -> None:
        self.surface.edit_text(annotation_id, text)

    def delete_annotation(self, annotation_id: str) -> bool:
        return self.surface.delete(annotation_id)

    def show_page(self, page_index: int, render: Optional[Callable[[int], Any]] = None) -> Any:
        """
        Switch the displayed page.

        With ``render``, the page is rendered first and the switch only
        happens once that succeeds. Errors from ``render`` propagate and the
        current page is left unchanged.

        Returns:
            Whatever ``render`` returned, or None without a renderer
        """
        rendered = render(page_index) if render is not None else None
        self.surface.set_page(page_index)
        return rendered

    def visible_annotations(self) -> List[TextAnnotation]:
        return self.surface.visible_annotations()

    def annotation_count(self) -> int:
        return len(self.store)

    def reset(self, page_index: int = 0) -> None:
        """Drop all annotations, e.g. when another document is opened."""
        self.surface.pointer_up()
        self.store.clear()
        self.surface.set_page(page_index)
        self.has_unsaved_changes = False
        self.annotations_changed.emit()

    def mark_saved(self) -> None:
        self.has_unsaved_changes = False

    @staticmethod
    def _origin_of(surface: QWidget) -> Point:
        # Read on every event, scrolling moves the surface
        return to_point(surface.mapToGlobal(QPoint(0, 0)))
