"""
Progress tracking schemas for StudyTracker.

Defines Pydantic models for course progress including:
- Square types (lectures / sessions)
- Per-course completion flags
- The full progress store persisted as a single blob
"""

from pydantic import BaseModel, StrictBool
from typing import Optional
from enum import Enum


class SquareType(str, Enum):
    LECTURES = "lectures"
    SESSIONS = "sessions"


class CourseProgress(BaseModel):
    """
    Completion flags for one course.
    Each index is an independent flag; index 3 may be set while index 2 is not.
    """
    lectures: list[StrictBool]
    sessions: list[StrictBool]

    @classmethod
    def empty(cls, squares_per_type: int) -> "CourseProgress":
        """All-false progress of the given length."""
        return cls(
            lectures=[False] * squares_per_type,
            sessions=[False] * squares_per_type,
        )

    def flags(self, square_type: SquareType) -> list[bool]:
        """Return the (mutable) flag list for a square type."""
        return getattr(self, SquareType(square_type).value)

    def completed_count(self) -> int:
        return sum(self.lectures) + sum(self.sessions)

    def has_shape(self, squares_per_type: int) -> bool:
        return (
            len(self.lectures) == squares_per_type
            and len(self.sessions) == squares_per_type
        )


class ProgressStore(BaseModel):
    courses: dict[str, CourseProgress] = {}  # keyed by course id

    def get_course(self, course_id: str) -> Optional[CourseProgress]:
        return self.courses.get(course_id)

    def to_blob(self) -> dict[str, dict[str, list[bool]]]:
        """Plain mapping in the persisted layout: {course_id: {lectures, sessions}}."""
        return {
            course_id: progress.model_dump()
            for course_id, progress in self.courses.items()
        }
