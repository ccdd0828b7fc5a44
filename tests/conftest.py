"""Shared fixtures: in-memory PDFs built with PyMuPDF and a fresh store."""

from __future__ import annotations

import fitz
import pytest

from pdfstamp.core.annotations import AnnotationStore, TextAnnotation

LETTER = (612, 792)


def make_pdf(*sizes: tuple) -> bytes:
    """Build a PDF with one blank page per (width, height) in ``sizes``."""
    doc = fitz.open()
    for width, height in sizes or (LETTER,):
        doc.new_page(width=width, height=height)
    data = doc.tobytes()
    doc.close()
    return data


def make_annotation(annotation_id: str = "a", **overrides) -> TextAnnotation:
    """Annotation with sensible defaults, any field can be overridden."""
    fields = dict(
        id=annotation_id,
        x=100.0,
        y=50.0,
        width=200.0,
        height=30.0,
        text="Hello",
        font_size=16.0,
        page_index=0,
    )
    fields.update(overrides)
    return TextAnnotation(**fields)


@pytest.fixture
def letter_pdf() -> bytes:
    """A single US-letter page."""
    return make_pdf(LETTER)


@pytest.fixture
def two_page_pdf() -> bytes:
    """Two pages of different heights."""
    return make_pdf(LETTER, (400, 600))


@pytest.fixture
def store() -> AnnotationStore:
    return AnnotationStore()
