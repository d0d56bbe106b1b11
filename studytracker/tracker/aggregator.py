"""
Completion statistics computed from a progress store.

Pure functions: no I/O and no mutation of the store.
"""

from dataclasses import dataclass

from studytracker.schemas import Catalog, ProgressStore


@dataclass(frozen=True)
class CourseCompletion:
    completed: int
    total: int
    percent: int


@dataclass(frozen=True)
class GlobalCompletion:
    completed: int
    remaining: int
    total: int
    percent: int


def round_half_up_percent(completed: int, total: int) -> int:
    """
    round(completed / total * 100) with halves rounded up.

    Computed on integers so that e.g. 1/200 gives 1, not banker's 0.
    """
    if total <= 0:
        return 0
    return (completed * 200 + total) // (total * 2)


def course_completion(store: ProgressStore, course_id: str, squares_per_type: int) -> CourseCompletion:
    """Completion of one course; a course missing from the store counts as zero."""
    total = squares_per_type * 2
    progress = store.get_course(course_id)
    completed = progress.completed_count() if progress else 0
    return CourseCompletion(
        completed=completed,
        total=total,
        percent=round_half_up_percent(completed, total),
    )


def global_completion(store: ProgressStore, catalog: Catalog) -> GlobalCompletion:
    """Completion summed over every catalog course, present in the store or not."""
    completed = sum(
        course_completion(store, course_id, catalog.squares_per_type).completed
        for course_id in catalog.course_ids
    )
    total = catalog.total_squares
    return GlobalCompletion(
        completed=completed,
        remaining=total - completed,
        total=total,
        percent=round_half_up_percent(completed, total),
    )
