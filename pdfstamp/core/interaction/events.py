"""
Change notifications emitted by the interaction surface.

Lets UI code react to store changes without the surface depending on a
particular toolkit.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from pdfstamp.core.annotations import TextAnnotation

logger = logging.getLogger(__name__)


class SurfaceEventType(Enum):
    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"
    PAGE_CHANGED = "page_changed"


@dataclass(frozen=True)
class SurfaceEvent:
    """Something changed on the surface."""
    event_type: SurfaceEventType
    annotation: Optional[TextAnnotation] = None
    annotation_id: Optional[str] = None
    page_index: Optional[int] = None


SurfaceListener = Callable[[SurfaceEvent], None]


class EventEmitter:
    """Minimal publish/subscribe helper."""

    def __init__(self):
        self._listeners: List[SurfaceListener] = []

    def add_listener(self, callback: SurfaceListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: SurfaceListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def emit(self, event: SurfaceEvent) -> None:
        """Deliver an event to every listener."""
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                # A broken listener must not stop the others
                logger.exception("Error in surface listener for %s", event.event_type.value)

    def clear(self) -> None:
        self._listeners.clear()
