"""StudyTracker - lecture and session progress tracking per course."""

__version__ = "0.1.0"
