"""
ViewSynchronizer - Push progress state into the rendering surface.

The synchronizer is the only tracker component that calls outward into
rendering. Square elements are looked up through a SquareRegistry built once
from the surface, keyed by (course_id, square type, index).
"""

import logging
from enum import Enum
from typing import Any, Hashable, Iterable, Protocol

from studytracker.schemas import Catalog, ProgressStore, SquareType

from .aggregator import course_completion, global_completion
from .errors import StudyTrackerError
from .validation import validate_square

logger = logging.getLogger(__name__)

SquareKey = tuple[str, SquareType, int]


class GlobalIndicator(str, Enum):
    """Header counters shown for all courses together."""
    COMPLETED = "completed"
    REMAINING = "remaining"
    PERCENT = "percent"


class RenderSurface(Protocol):
    """Rendering collaborator consumed by ViewSynchronizer."""

    def enumerate_squares(self) -> Iterable[tuple[str, str, int, Hashable]]:
        """Yield (course_id, square_type, index, handle) for every square element."""
        ...

    def set_square_completed(self, handle: Any, completed: bool) -> None:
        ...

    def set_course_progress(self, course_id: str, width: str, text: str) -> None:
        ...

    def set_global_indicator(self, indicator: GlobalIndicator, text: str) -> None:
        ...

    def pulse(self, handle: Any) -> None:
        """Transient click feedback; may be dropped without affecting state."""
        ...


class SquareRegistry:
    """Index of square handles by (course_id, square type, index)."""

    def __init__(self, handles: dict[SquareKey, Any]):
        self._handles = handles

    @classmethod
    def build(cls, surface: RenderSurface, catalog: Catalog) -> "SquareRegistry":
        """Enumerate the surface once, skipping elements outside the catalog."""
        handles: dict[SquareKey, Any] = {}
        for course_id, square_type, index, handle in surface.enumerate_squares():
            try:
                parsed = validate_square(catalog, course_id, square_type, index)
            except StudyTrackerError as e:
                logger.warning(f"Skipping square element ({course_id}, {square_type}, {index}): {e}")
                continue
            handles[(course_id, parsed, index)] = handle
        logger.debug(f"Registered {len(handles)} square elements")
        return cls(handles)

    def get(self, course_id: str, square_type: SquareType, index: int) -> Any:
        return self._handles.get((course_id, SquareType(square_type), index))

    def items(self):
        return self._handles.items()

    def for_course(self, course_id: str) -> list[tuple[SquareKey, Any]]:
        return [(key, handle) for key, handle in self._handles.items() if key[0] == course_id]

    def __len__(self) -> int:
        return len(self._handles)


def _stored_flag(store: ProgressStore, course_id: str, square_type: SquareType, index: int) -> bool:
    progress = store.get_course(course_id)
    if progress is None:
        return False
    flags = progress.flags(square_type)
    return index < len(flags) and flags[index]


class ViewSynchronizer:
    """
    Render store state onto a RenderSurface.

    Every method sets absolute values, so applying the same state twice
    leaves the surface unchanged.
    """

    def __init__(self, surface: RenderSurface, catalog: Catalog):
        self.surface = surface
        self.catalog = catalog
        self.registry = SquareRegistry.build(surface, catalog)

    def apply_all(self, store: ProgressStore):
        """Full resynchronization: every square, every course indicator, global counters."""
        for (course_id, square_type, index), handle in self.registry.items():
            self.surface.set_square_completed(
                handle, _stored_flag(store, course_id, square_type, index)
            )
        for course_id in self.catalog.course_ids:
            self._render_course_indicator(store, course_id)
        self.apply_global(store)

    def apply_course(self, store: ProgressStore, course_id: str):
        """Course indicator plus global counters (any course change moves the total)."""
        self._render_course_indicator(store, course_id)
        self.apply_global(store)

    def apply_course_squares(self, store: ProgressStore, course_id: str):
        """Square marks of one course."""
        for (_, square_type, index), handle in self.registry.for_course(course_id):
            self.surface.set_square_completed(
                handle, _stored_flag(store, course_id, square_type, index)
            )

    def apply_square(self, store: ProgressStore, course_id: str, square_type: SquareType, index: int):
        handle = self.registry.get(course_id, square_type, index)
        if handle is None:
            return
        self.surface.set_square_completed(
            handle, _stored_flag(store, course_id, SquareType(square_type), index)
        )

    def apply_global(self, store: ProgressStore):
        stats = global_completion(store, self.catalog)
        self.surface.set_global_indicator(GlobalIndicator.COMPLETED, str(stats.completed))
        self.surface.set_global_indicator(GlobalIndicator.REMAINING, str(stats.remaining))
        self.surface.set_global_indicator(GlobalIndicator.PERCENT, f"{stats.percent}%")

    def pulse(self, course_id: str, square_type: SquareType, index: int):
        """Fire-and-forget feedback on one square."""
        handle = self.registry.get(course_id, square_type, index)
        if handle is not None:
            self.surface.pulse(handle)

    def _render_course_indicator(self, store: ProgressStore, course_id: str):
        stats = course_completion(store, course_id, self.catalog.squares_per_type)
        self.surface.set_course_progress(course_id, f"{stats.percent}%", f"{stats.percent}%")
