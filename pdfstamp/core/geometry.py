"""
Conversions between display space and document space.

Display space is the rendered page surface: pixels at the active scale,
origin top-left, Y growing downward. Document space is the PDF page itself:
unscaled points, origin bottom-left, Y growing upward.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Simple 2D point."""
    x: float
    y: float

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def client_to_display(client_pos: Point, surface_origin: Point) -> Point:
    """
    Convert a pointer position to display coordinates.

    Args:
        client_pos: Pointer position in window/screen coordinates
        surface_origin: Top-left corner of the page surface, in the same
            coordinates, measured at the time of the event

    Returns:
        Position relative to the page surface's top-left corner
    """
    return client_pos - surface_origin


def display_to_document(x: float, y: float, font_size: float,
                        scale: float, page_height: float) -> Tuple[float, float]:
    """
    Map an annotation's display position to the point where its text
    baseline is drawn in the document.

    The Y axis is flipped around the page height, and half the font size is
    subtracted so the baseline lands near the vertical centre of the box
    shown on screen.

    Args:
        x: Display-space X
        y: Display-space Y
        font_size: Annotation font size
        scale: Display scale in effect when the position was captured
        page_height: Intrinsic (unscaled) page height in points

    Returns:
        Tuple of (document_x, document_y)
    """
    _check_scale(scale)
    document_x = x / scale
    document_y = page_height - (y / scale) - (font_size / 2)
    return document_x, document_y


def document_to_display(document_x: float, document_y: float, font_size: float,
                        scale: float, page_height: float) -> Tuple[float, float]:
    """Inverse of :func:`display_to_document`."""
    _check_scale(scale)
    x = document_x * scale
    y = (page_height - document_y - (font_size / 2)) * scale
    return x, y


def flip_y(document_y: float, page_height: float) -> float:
    """Convert a bottom-left origin Y to a top-left origin Y (and back)."""
    return page_height - document_y


def _check_scale(scale: float) -> None:
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")
