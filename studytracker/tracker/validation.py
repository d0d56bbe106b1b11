"""Identity checks for (course, type, index) square coordinates."""

from studytracker.schemas import Catalog, SquareType

from .errors import InvalidIndexError, InvalidTypeError, UnknownCourseError


def parse_square_type(value) -> SquareType:
    """Accept a SquareType or its string value."""
    try:
        return SquareType(value)
    except ValueError:
        valid = ", ".join(t.value for t in SquareType)
        raise InvalidTypeError(f"Invalid square type {value!r} (expected one of: {valid})") from None


def validate_square(catalog: Catalog, course_id: str, square_type, index) -> SquareType:
    """
    Check that a square coordinate exists in the catalog.

    Returns:
        The parsed SquareType

    Raises:
        UnknownCourseError, InvalidTypeError, InvalidIndexError
    """
    if not catalog.has_course(course_id):
        raise UnknownCourseError(course_id)
    parsed = parse_square_type(square_type)
    # bool is an int subclass but never a valid index
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndexError(f"Square index must be an integer, got {index!r}")
    if not 0 <= index < catalog.squares_per_type:
        raise InvalidIndexError(
            f"Square index {index} out of range [0, {catalog.squares_per_type})"
        )
    return parsed
