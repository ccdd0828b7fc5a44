"""
Pointer and keyboard handling for annotations on the displayed page.

UI-agnostic: widgets forward raw positions here and redraw when the
surface reports a change.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from pdfstamp.config import EditorDefaults
from pdfstamp.core.annotations import AnnotationStore, TextAnnotation, new_annotation_id
from pdfstamp.core.errors import NotFound
from pdfstamp.core.geometry import Point, client_to_display
from .events import EventEmitter, SurfaceEvent, SurfaceEventType, SurfaceListener

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragState:
    """Current state of the drag state machine."""
    mode: EditorMode = EditorMode.IDLE
    annotation_id: Optional[str] = None
    grab_offset: Point = Point(0.0, 0.0)

    @property
    def is_dragging(self) -> bool:
        return self.mode is EditorMode.DRAGGING


IDLE = DragState()


class InteractionSurface:
    """
    Turns pointer and text input on the displayed page into store
    operations.

    Every position handed in is a pair of (pointer position, page surface
    top-left) in the same coordinate system, both read at the time of the
    event. The surface never caches the page origin, since scrolling can
    move it between two events.
    """

    def __init__(self, store: AnnotationStore, page_index: int = 0,
                 defaults: Optional[EditorDefaults] = None,
                 id_factory: Callable[[], str] = new_annotation_id):
        self.store = store
        self.defaults = defaults or EditorDefaults()
        self._id_factory = id_factory
        self._page_index = page_index
        self._drag = IDLE
        self.events = EventEmitter()

    @property
    def page_index(self) -> int:
        """Index of the page currently displayed."""
        return self._page_index

    @property
    def drag_state(self) -> DragState:
        return self._drag

    def add_listener(self, callback: SurfaceListener) -> None:
        self.events.add_listener(callback)

    def remove_listener(self, callback: SurfaceListener) -> None:
        self.events.remove_listener(callback)

    @staticmethod
    def to_display(client_pos: Point, surface_origin: Point) -> Point:
        """Pointer position relative to the page surface's top-left."""
        return client_to_display(client_pos, surface_origin)

    # Drag state machine

    def pointer_down(self, annotation_id: str, client_pos: Point,
                     surface_origin: Point) -> bool:
        """
        Start dragging an annotation by its handle.

        Args:
            annotation_id: Annotation whose handle was pressed
            client_pos: Pointer position
            surface_origin: Page surface top-left at the time of the event

        Returns:
            True if a drag was started
        """
        try:
            annotation = self.store.get(annotation_id)
        except NotFound:
            logger.debug("Ignoring drag on missing annotation %s", annotation_id)
            return False

        position = self.to_display(client_pos, surface_origin)
        offset = position - Point(annotation.x, annotation.y)
        self._drag = DragState(EditorMode.DRAGGING, annotation_id, offset)
        logger.debug("Drag started on %s with offset %s", annotation_id, offset.to_tuple())
        return True

    def pointer_move(self, client_pos: Point,
                     surface_origin: Point) -> Optional[TextAnnotation]:
        """
        Move the dragged annotation so it keeps the offset captured at
        pointer-down.

        Returns:
            The updated annotation, or None when not dragging
        """
        if not self._drag.is_dragging:
            return None

        try:
            annotation = self.store.get(self._drag.annotation_id)
        except NotFound:
            # Deleted while being dragged
            self._drag = IDLE
            return None

        target = self.to_display(client_pos, surface_origin) - self._drag.grab_offset
        moved = annotation.moved_to(target.x, target.y)
        self.store.update(moved)
        self.events.emit(SurfaceEvent(SurfaceEventType.UPDATED, moved, moved.id))
        return moved

    def pointer_up(self) -> None:
        """End any drag in progress."""
        if self._drag.is_dragging:
            logger.debug("Drag ended on %s", self._drag.annotation_id)
        self._drag = IDLE

    # Creation, editing and deletion

    def double_click(self, client_pos: Point, surface_origin: Point,
                     on_annotation: bool = False) -> Optional[TextAnnotation]:
        """
        Create a placeholder annotation where the page was double-clicked.

        Args:
            client_pos: Pointer position
            surface_origin: Page surface top-left at the time of the event
            on_annotation: True if the click landed on an annotation's
                editable region, in which case nothing is created

        Returns:
            The new annotation, or None
        """
        if on_annotation:
            return None

        position = self.to_display(client_pos, surface_origin)
        defaults = self.defaults
        annotation = TextAnnotation(
            id=self._id_factory(),
            x=position.x,
            y=position.y - defaults.vertical_click_offset,
            width=defaults.box_width,
            height=defaults.box_height,
            text=defaults.placeholder_text,
            font_size=defaults.font_size,
            page_index=self._page_index,
        )
        self.store.add(annotation)
        logger.info("Created annotation %s at (%.1f, %.1f) on page %d",
                    annotation.id, annotation.x, annotation.y, annotation.page_index)
        self.events.emit(SurfaceEvent(SurfaceEventType.ADDED, annotation, annotation.id))
        return annotation

    def edit_text(self, annotation_id: str, text: str) -> TextAnnotation:
        """
        Replace an annotation's text.

        Raises:
            NotFound: If the annotation does not exist
        """
        updated = self.store.get(annotation_id).with_text(text)
        self.store.update(updated)
        self.events.emit(SurfaceEvent(SurfaceEventType.UPDATED, updated, updated.id))
        return updated

    def delete(self, annotation_id: str) -> bool:
        """
        Delete an annotation. Deleting one that is already gone is a no-op.

        Returns:
            True if an annotation was removed
        """
        if self._drag.annotation_id == annotation_id:
            self._drag = IDLE

        try:
            self.store.remove(annotation_id)
        except NotFound:
            logger.debug("Delete of %s ignored, already removed", annotation_id)
            return False

        self.events.emit(SurfaceEvent(SurfaceEventType.REMOVED, None, annotation_id))
        return True

    # Page display

    def set_page(self, page_index: int) -> None:
        """Switch the displayed page. Annotations are left untouched."""
        if page_index < 0:
            raise ValueError(f"Page index must be >= 0, got {page_index}")

        self._drag = IDLE
        if page_index == self._page_index:
            return

        self._page_index = page_index
        self.events.emit(SurfaceEvent(SurfaceEventType.PAGE_CHANGED, page_index=page_index))

    def visible_annotations(self) -> List[TextAnnotation]:
        """Annotations belonging to the displayed page."""
        return list(self.store.filter_by_page(self._page_index))
