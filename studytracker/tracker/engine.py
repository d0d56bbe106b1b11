"""
Mutation engine - Toggle and reset operations on the progress store.

Provides:
- toggle_square / reset_course: validated in-place mutations of a store
- MutationEngine: session object that owns the live store and runs
  mutate -> persist -> recompute -> render for every change
"""

import logging
from typing import Optional

from studytracker.schemas import Catalog, CourseProgress, ProgressStore, SquareType

from .aggregator import CourseCompletion, GlobalCompletion, course_completion, global_completion
from .errors import StoreNotLoadedError, UnknownCourseError
from .store import ProgressStorage
from .validation import validate_square
from .view import ViewSynchronizer

logger = logging.getLogger(__name__)


def toggle_square(
    store: ProgressStore,
    catalog: Catalog,
    course_id: str,
    square_type: SquareType,
    index: int,
) -> bool:
    """
    Flip one completion flag in place.

    A catalog course missing from the store is created as all-false first.
    Validation happens before any change, so a rejected call leaves the
    store untouched.

    Returns:
        The new value of the flag

    Raises:
        UnknownCourseError, InvalidTypeError, InvalidIndexError
    """
    parsed = validate_square(catalog, course_id, square_type, index)

    progress = store.get_course(course_id)
    if progress is None:
        progress = CourseProgress.empty(catalog.squares_per_type)
        store.courses[course_id] = progress

    flags = progress.flags(parsed)
    flags[index] = not flags[index]
    return flags[index]


def reset_course(store: ProgressStore, catalog: Catalog, course_id: str):
    """Replace a course's progress with all-false, whatever it held before."""
    if not catalog.has_course(course_id):
        raise UnknownCourseError(course_id)
    store.courses[course_id] = CourseProgress.empty(catalog.squares_per_type)


class MutationEngine:
    """
    Apply user mutations to the live progress store.

    Combines ProgressStorage (persistence) with an optional ViewSynchronizer
    (rendering). Each mutation completes persist, recompute and render
    before returning.
    """

    def __init__(self, storage: ProgressStorage, view: Optional[ViewSynchronizer] = None):
        """
        Initialize the engine and load the store.

        Args:
            storage: ProgressStorage for load/save
            view: ViewSynchronizer to render into (optional for headless use)
        """
        self.storage = storage
        self.catalog = storage.catalog
        self.view = view
        self.persisted = True  # False after a failed save
        self._store: Optional[ProgressStore] = None
        self.reload()

    @property
    def store(self) -> ProgressStore:
        if self._store is None:
            raise StoreNotLoadedError("Progress was erased; reload before continuing")
        return self._store

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reload(self) -> ProgressStore:
        """Load the store from storage and fully resynchronize the view."""
        self._store = self.storage.load()
        self.persisted = True
        if self.view:
            self.view.apply_all(self._store)
        return self._store

    def invalidate(self):
        """Drop the in-memory store; the next access requires reload()."""
        self._store = None

    def replace_store(self, store: ProgressStore) -> bool:
        """Replace the whole store (import), persist it and resynchronize the view."""
        self._store = store
        self.persisted = self.storage.save(store)
        if self.view:
            self.view.apply_all(store)
        return self.persisted

    def erase_all(self) -> bool:
        """Erase persisted progress and invalidate this session. The session stays loaded if the erase failed."""
        if not self.storage.erase():
            return False
        self.invalidate()
        return True

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def toggle(self, course_id: str, square_type: SquareType, index: int) -> bool:
        """Toggle one square. Returns its new completion state."""
        store = self.store
        value = toggle_square(store, self.catalog, course_id, square_type, index)
        self.persisted = self.storage.save(store)
        if self.view:
            self.view.apply_square(store, course_id, square_type, index)
            self.view.apply_course(store, course_id)
            self.view.pulse(course_id, square_type, index)
        return value

    def reset_course(self, course_id: str) -> CourseCompletion:
        """Clear every square of a course. Confirmation is the caller's job."""
        store = self.store
        reset_course(store, self.catalog, course_id)
        self.persisted = self.storage.save(store)
        stats = course_completion(store, course_id, self.catalog.squares_per_type)
        if self.view:
            self.view.apply_course_squares(store, course_id)
            self.view.apply_course(store, course_id)
        logger.info(f"Reset progress for {course_id}")
        return stats

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_completed(self, course_id: str, square_type: SquareType, index: int) -> bool:
        parsed = validate_square(self.catalog, course_id, square_type, index)
        progress = self.store.get_course(course_id)
        return bool(progress and progress.flags(parsed)[index])

    def course_completion(self, course_id: str) -> CourseCompletion:
        if not self.catalog.has_course(course_id):
            raise UnknownCourseError(course_id)
        return course_completion(self.store, course_id, self.catalog.squares_per_type)

    def global_completion(self) -> GlobalCompletion:
        return global_completion(self.store, self.catalog)
