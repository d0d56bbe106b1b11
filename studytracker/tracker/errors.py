"""
Error types raised by the tracker.

Storage failures (read/write) are recovered locally by ProgressStorage;
data-contract violations (course/type/index) and malformed imports are
raised to the caller.
"""


class StudyTrackerError(Exception):
    """Base class for all tracker errors."""


class CatalogError(StudyTrackerError):
    """Course catalog configuration is missing or invalid."""


class StorageReadError(StudyTrackerError):
    """Persisted progress could not be read or decoded."""


class StorageWriteError(StudyTrackerError):
    """Progress could not be persisted (e.g. disk full, read-only database)."""


class UnknownCourseError(StudyTrackerError, KeyError):
    """Course id is not part of the catalog."""

    def __init__(self, course_id: str):
        super().__init__(course_id)
        self.course_id = course_id

    def __str__(self):
        return f"Unknown course: {self.course_id!r}"


class InvalidTypeError(StudyTrackerError, ValueError):
    """Square type is neither 'lectures' nor 'sessions'."""


class InvalidIndexError(StudyTrackerError, ValueError):
    """Square index is outside [0, squares_per_type)."""


class ImportMalformedError(StudyTrackerError, ValueError):
    """Import text is not a valid progress document."""


class StoreNotLoadedError(StudyTrackerError):
    """Progress was erased; the session must be reloaded before use."""
