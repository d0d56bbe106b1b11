"""
StudyTracker Schemas - Pydantic models for the progress tracker.

This module exports all schema classes for:
- Catalog: tracked courses and squares per type
- Progress: per-course completion flags and the progress store
"""

# Catalog schemas
from .catalog import (
    Course,
    Catalog,
)

# Progress schemas
from .progress import (
    SquareType,
    CourseProgress,
    ProgressStore,
)

__all__ = [
    # Catalog
    'Course',
    'Catalog',
    # Progress
    'SquareType',
    'CourseProgress',
    'ProgressStore',
]
