"""
Board renderer - View-model and HTML for the course progress board.

Provides:
- BoardView: in-process RenderSurface holding square marks and indicator text
- Progress bar and global stats HTML for Streamlit
"""

import html
from dataclasses import dataclass
from typing import Iterator

from studytracker.schemas import Catalog, SquareType
from studytracker.tracker import GlobalIndicator


@dataclass(frozen=True)
class SquareHandle:
    """Identity of one square element on the board."""
    course_id: str
    square_type: SquareType
    index: int


@dataclass
class CourseIndicator:
    width: str = "0%"
    text: str = "0%"


class BoardView:
    """
    Rendering surface backed by plain Python state.

    ViewSynchronizer writes into it; the Streamlit layer draws from it.
    Feedback pulses are queued separately and never touch square state.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.squares: dict[SquareHandle, bool] = {
            SquareHandle(course_id, square_type, index): False
            for course_id in catalog.course_ids
            for square_type in SquareType
            for index in range(catalog.squares_per_type)
        }
        self.course_indicators: dict[str, CourseIndicator] = {
            course_id: CourseIndicator() for course_id in catalog.course_ids
        }
        self.global_indicators: dict[GlobalIndicator, str] = {
            GlobalIndicator.COMPLETED: "0",
            GlobalIndicator.REMAINING: str(catalog.total_squares),
            GlobalIndicator.PERCENT: "0%",
        }
        self.pending_feedback: list[SquareHandle] = []

    # RenderSurface -----------------------------------------------------------

    def enumerate_squares(self) -> Iterator[tuple[str, str, int, SquareHandle]]:
        for handle in self.squares:
            yield handle.course_id, handle.square_type.value, handle.index, handle

    def set_square_completed(self, handle: SquareHandle, completed: bool):
        self.squares[handle] = bool(completed)

    def set_course_progress(self, course_id: str, width: str, text: str):
        self.course_indicators[course_id] = CourseIndicator(width=width, text=text)

    def set_global_indicator(self, indicator: GlobalIndicator, text: str):
        self.global_indicators[GlobalIndicator(indicator)] = text

    def pulse(self, handle: SquareHandle):
        self.pending_feedback.append(handle)

    # Reading -----------------------------------------------------------------

    def is_completed(self, course_id: str, square_type: SquareType, index: int) -> bool:
        return self.squares.get(SquareHandle(course_id, SquareType(square_type), index), False)

    def drain_feedback(self) -> list[SquareHandle]:
        """Return and clear queued feedback pulses."""
        pending, self.pending_feedback = self.pending_feedback, []
        return pending

    def snapshot(self) -> dict:
        """Visible state (squares, course and global indicators) without feedback."""
        return {
            "squares": dict(self.squares),
            "courses": {cid: (ind.width, ind.text) for cid, ind in self.course_indicators.items()},
            "global": dict(self.global_indicators),
        }


def square_label(square_type: SquareType, index: int) -> str:
    """Short button label, e.g. L1 for the first lecture."""
    prefix = "L" if SquareType(square_type) == SquareType.LECTURES else "S"
    return f"{prefix}{index + 1}"


def get_board_css() -> str:
    """Get CSS styles for progress bars and header stats."""
    return """
    <style>
    .progress-bar {
        background: #eceff1;
        border-radius: 8px;
        height: 10px;
        overflow: hidden;
        margin: 0.3em 0;
    }
    .progress-fill {
        background: linear-gradient(90deg, #43A047, #66BB6A);
        height: 100%;
        transition: width 0.3s ease;
    }
    .progress-text {
        font-size: 0.9em;
        font-weight: 600;
        color: #388E3C;
    }
    .global-stats {
        display: flex;
        gap: 2em;
        margin: 1em 0;
    }
    .global-stat-value {
        font-size: 1.8em;
        font-weight: 700;
        color: #1565C0;
    }
    .global-stat-label {
        color: #666;
        font-size: 0.85em;
    }
    </style>
    """


def render_progress_bar(course_id: str, indicator: CourseIndicator) -> str:
    """Render a course progress bar using the indicator's width and text."""
    cid = html.escape(course_id)
    return (
        f'<div class="progress-bar" data-course="{cid}">'
        f'<div class="progress-fill" data-course="{cid}" style="width: {html.escape(indicator.width)}"></div>'
        f'</div>'
        f'<span class="progress-text" data-course="{cid}">{html.escape(indicator.text)}</span>'
    )


def render_global_stats(view: BoardView) -> str:
    """Render the completed / remaining / percent header counters."""
    labels = [
        (GlobalIndicator.COMPLETED, "Completed"),
        (GlobalIndicator.REMAINING, "Remaining"),
        (GlobalIndicator.PERCENT, "Overall"),
    ]
    parts = ['<div class="global-stats">']
    for indicator, label in labels:
        parts.append('<div class="global-stat">')
        parts.append(f'<div class="global-stat-value">{html.escape(view.global_indicators[indicator])}</div>')
        parts.append(f'<div class="global-stat-label">{label}</div>')
        parts.append('</div>')
    parts.append('</div>')
    return ''.join(parts)
