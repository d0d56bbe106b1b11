"""
StudyTracker Tracker - Runtime components for progress state.

This module provides:
- ProgressStorage: Load/save the progress store
- Aggregator functions: Course and global completion
- ViewSynchronizer: Render state onto a RenderSurface
- MutationEngine: Toggle/reset with persist and render
- Import/export and the AdminConsole operator surface
"""

from .errors import (
    StudyTrackerError,
    CatalogError,
    StorageReadError,
    StorageWriteError,
    UnknownCourseError,
    InvalidTypeError,
    InvalidIndexError,
    ImportMalformedError,
    StoreNotLoadedError,
)

from .store import (
    ProgressStorage,
    create_default_store,
    parse_persisted_blob,
)

from .aggregator import (
    CourseCompletion,
    GlobalCompletion,
    course_completion,
    global_completion,
    round_half_up_percent,
)

from .view import (
    GlobalIndicator,
    RenderSurface,
    SquareRegistry,
    ViewSynchronizer,
)

from .engine import (
    MutationEngine,
    toggle_square,
    reset_course,
)

from .transfer import (
    export_progress,
    import_progress,
)

from .admin import AdminConsole

__all__ = [
    # Errors
    "StudyTrackerError",
    "CatalogError",
    "StorageReadError",
    "StorageWriteError",
    "UnknownCourseError",
    "InvalidTypeError",
    "InvalidIndexError",
    "ImportMalformedError",
    "StoreNotLoadedError",
    # Store
    "ProgressStorage",
    "create_default_store",
    "parse_persisted_blob",
    # Aggregator
    "CourseCompletion",
    "GlobalCompletion",
    "course_completion",
    "global_completion",
    "round_half_up_percent",
    # View
    "GlobalIndicator",
    "RenderSurface",
    "SquareRegistry",
    "ViewSynchronizer",
    # Engine
    "MutationEngine",
    "toggle_square",
    "reset_course",
    # Transfer
    "export_progress",
    "import_progress",
    "AdminConsole",
]
