"""
In-memory store holding every annotation of the open document.
"""
import logging
from typing import Iterator, List, Tuple

from pdfstamp.core.errors import DuplicateId, NotFound
from .models import TextAnnotation

logger = logging.getLogger(__name__)


class AnnotationStore:
    """Ordered collection of annotations for all pages of a document.

    All mutations replace whole records. There is a single writer (the GUI
    thread), so no locking is done; callers that hand the annotations to
    another thread take a :meth:`snapshot` first.
    """

    def __init__(self):
        self._annotations: List[TextAnnotation] = []

    def add(self, annotation: TextAnnotation) -> None:
        """
        Append a new annotation.

        Args:
            annotation: Annotation to add

        Raises:
            DuplicateId: If an annotation with the same id is already stored
        """
        if self._index_of(annotation.id) is not None:
            raise DuplicateId(annotation.id)

        self._annotations.append(annotation)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Added annotation %s", annotation.to_dict())

    def update(self, annotation: TextAnnotation) -> None:
        """
        Replace the stored record that has the same id.

        Args:
            annotation: New version of the annotation

        Raises:
            NotFound: If no annotation has this id
        """
        index = self._index_of(annotation.id)
        if index is None:
            raise NotFound(annotation.id)

        self._annotations[index] = annotation
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Updated annotation %s", annotation.to_dict())

    def remove(self, annotation_id: str) -> None:
        """
        Delete the annotation with the given id.

        Raises:
            NotFound: If no annotation has this id
        """
        index = self._index_of(annotation_id)
        if index is None:
            raise NotFound(annotation_id)

        del self._annotations[index]
        logger.debug("Removed annotation %s", annotation_id)

    def get(self, annotation_id: str) -> TextAnnotation:
        """
        Look up an annotation by id.

        Raises:
            NotFound: If no annotation has this id
        """
        index = self._index_of(annotation_id)
        if index is None:
            raise NotFound(annotation_id)
        return self._annotations[index]

    def filter_by_page(self, page_index: int) -> Iterator[TextAnnotation]:
        """
        Iterate over the annotations of one page, in store order.

        Args:
            page_index: 0-based page index

        Returns:
            A fresh generator on every call
        """
        return (ann for ann in self._annotations if ann.page_index == page_index)

    def snapshot(self) -> Tuple[TextAnnotation, ...]:
        """Return the current annotations as an immutable tuple."""
        return tuple(self._annotations)

    def clear(self) -> None:
        """Remove every annotation."""
        self._annotations.clear()

    def _index_of(self, annotation_id: str):
        for index, ann in enumerate(self._annotations):
            if ann.id == annotation_id:
                return index
        return None

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[TextAnnotation]:
        return iter(list(self._annotations))

    def __contains__(self, annotation_id: object) -> bool:
        return any(ann.id == annotation_id for ann in self._annotations)
