"""StudyTracker utilities."""

from .catalog_loader import load_catalog, get_available_catalogs

__all__ = ["load_catalog", "get_available_catalogs"]
