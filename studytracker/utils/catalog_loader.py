"""
Catalog loader utility for StudyTracker.

Loads course catalogs from YAML files (default: the bundled courses.yaml).
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from studytracker.config import DEFAULT_CATALOG_PATH
from studytracker.schemas import Catalog
from studytracker.tracker.errors import CatalogError


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    Load and validate a course catalog.

    Args:
        path: Optional catalog YAML file (default: DEFAULT_CATALOG_PATH)

    Returns:
        Validated Catalog

    Raises:
        CatalogError: If the file is missing, not valid YAML, or fails validation
    """
    file_path = Path(path) if path else DEFAULT_CATALOG_PATH

    if not file_path.exists():
        raise CatalogError(f"Course catalog not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"Course catalog must be a mapping: {file_path}")

    try:
        return Catalog.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid course catalog {file_path}: {e}") from e


def get_available_catalogs(catalog_dir: Path) -> list[str]:
    """
    List catalog files in a directory.

    Returns:
        List of catalog names (without .yaml extension)
    """
    if not catalog_dir.exists():
        return []
    return sorted(p.stem for p in catalog_dir.glob("*.yaml"))
