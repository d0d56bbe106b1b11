"""
StudyTracker Viewer - Rendering components for the progress board.

This module provides:
- BoardView: view-model implementing the tracker's RenderSurface
- Progress bar and global stats rendering
"""

from .board import (
    BoardView,
    SquareHandle,
    CourseIndicator,
    square_label,
    get_board_css,
    render_progress_bar,
    render_global_stats,
)

__all__ = [
    "BoardView",
    "SquareHandle",
    "CourseIndicator",
    "square_label",
    "get_board_css",
    "render_progress_bar",
    "render_global_stats",
]
