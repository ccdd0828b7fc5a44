"""
Text annotation model and store.
"""
from .models import TextAnnotation, new_annotation_id
from .store import AnnotationStore

__all__ = [
    'TextAnnotation',
    'new_annotation_id',
    'AnnotationStore',
]
