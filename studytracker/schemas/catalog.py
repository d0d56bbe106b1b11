"""
Catalog schemas for StudyTracker.

The catalog is the fixed, ordered set of tracked courses plus the number
of squares per type. It comes from configuration (courses.yaml); no code
path depends on a specific course id.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from studytracker.config import SQUARES_PER_TYPE


class Course(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    group: Optional[str] = None  # display grouping only

    @property
    def display_title(self) -> str:
        return self.title or self.id


class Catalog(BaseModel):
    courses: list[Course] = Field(..., min_length=1)
    squares_per_type: int = Field(default=SQUARES_PER_TYPE, ge=1)

    @field_validator('courses')
    @classmethod
    def course_ids_unique(cls, v):
        seen = set()
        for course in v:
            if course.id in seen:
                raise ValueError(f'duplicate course id: {course.id}')
            seen.add(course.id)
        return v

    @classmethod
    def from_ids(cls, course_ids: list[str], squares_per_type: int = SQUARES_PER_TYPE) -> "Catalog":
        """Build a catalog from bare ids (titles default to the id)."""
        return cls(
            courses=[Course(id=cid) for cid in course_ids],
            squares_per_type=squares_per_type,
        )

    @property
    def course_ids(self) -> list[str]:
        return [course.id for course in self.courses]

    @property
    def total_squares(self) -> int:
        """Squares across all courses and both types."""
        return len(self.courses) * self.squares_per_type * 2

    def has_course(self, course_id: str) -> bool:
        return any(course.id == course_id for course in self.courses)

    def get_course(self, course_id: str) -> Optional[Course]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def grouped(self) -> dict[str, list[Course]]:
        """Courses grouped by their group label, preserving catalog order."""
        groups: dict[str, list[Course]] = {}
        for course in self.courses:
            groups.setdefault(course.group or "", []).append(course)
        return groups
