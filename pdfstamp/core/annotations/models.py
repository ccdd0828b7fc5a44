"""
Annotation data model.
"""
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict


def new_annotation_id() -> str:
    """Generate a session-unique annotation id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TextAnnotation:
    """A short text label placed on a PDF page.

    Positions and sizes are in display space: pixels at the session's
    display scale, origin at the top-left of the rendered page.
    Instances are immutable; edits produce a new record that replaces the
    old one in the store.
    """
    id: str
    x: float
    y: float
    width: float
    height: float
    text: str
    font_size: float
    page_index: int  # 0-based page index

    def moved_to(self, x: float, y: float) -> "TextAnnotation":
        """Return a copy positioned at (x, y)."""
        return replace(self, x=x, y=y)

    def with_text(self, text: str) -> "TextAnnotation":
        """Return a copy with new text content."""
        return replace(self, text=text)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of the fields, used in log output."""
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'text': self.text,
            'font_size': self.font_size,
            'page_index': self.page_index,
        }
