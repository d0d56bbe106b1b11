"""
Import/export of the progress store as JSON text.

Export always writes every catalog course with full-length sequences.
Import normalizes instead of trusting the input shape:
- sequences shorter than squares_per_type are padded with False
- longer sequences are truncated
- a missing "lectures"/"sessions" key means all-false
- unknown course ids are dropped, missing catalog courses are all-false
Anything that is not a mapping of boolean lists is rejected.
"""

import json
import logging

from studytracker.schemas import Catalog, CourseProgress, ProgressStore, SquareType

from .errors import ImportMalformedError

logger = logging.getLogger(__name__)


def export_progress(store: ProgressStore, catalog: Catalog) -> str:
    """Serialize the store to indented JSON, one entry per catalog course."""
    k = catalog.squares_per_type
    data = {}
    for course_id in catalog.course_ids:
        progress = store.get_course(course_id) or CourseProgress.empty(k)
        data[course_id] = {
            square_type.value: _fit_length(progress.flags(square_type), k)
            for square_type in SquareType
        }
    return json.dumps(data, indent=2, ensure_ascii=False)


def import_progress(text: str | bytes, catalog: Catalog) -> ProgressStore:
    """
    Parse exported JSON text (or raw file bytes) into a normalized store.

    Raises:
        ImportMalformedError: If the text is not JSON or not a progress mapping
    """
    try:
        raw = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        raise ImportMalformedError(f"Import data is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ImportMalformedError(
            f"Import data must be an object keyed by course id, got {type(raw).__name__}"
        )

    k = catalog.squares_per_type
    courses = {}
    for course_id in catalog.course_ids:
        entry = raw.get(course_id)
        if entry is None:
            courses[course_id] = CourseProgress.empty(k)
            continue
        if not isinstance(entry, dict):
            raise ImportMalformedError(f"Progress for {course_id} must be an object")
        courses[course_id] = CourseProgress(**{
            square_type.value: _normalize_flags(course_id, square_type, entry.get(square_type.value), k)
            for square_type in SquareType
        })

    dropped = sorted(set(raw) - set(catalog.course_ids))
    if dropped:
        logger.info(f"Import ignored {len(dropped)} unknown courses: {dropped}")

    return ProgressStore(courses=courses)


def _normalize_flags(course_id: str, square_type: SquareType, value, k: int) -> list[bool]:
    if value is None:
        return [False] * k
    if not isinstance(value, list):
        raise ImportMalformedError(f"{course_id}.{square_type.value} must be a list")
    if not all(isinstance(flag, bool) for flag in value):
        raise ImportMalformedError(f"{course_id}.{square_type.value} must contain only true/false")
    if len(value) != k:
        logger.debug(f"Normalizing {course_id}.{square_type.value} from {len(value)} to {k} squares")
    return _fit_length(value, k)


def _fit_length(flags: list[bool], k: int) -> list[bool]:
    """Pad with False or truncate to exactly k entries."""
    return list(flags[:k]) + [False] * (k - len(flags))
