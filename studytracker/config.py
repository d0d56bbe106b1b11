"""
StudyTracker configuration.

Module-level defaults, overridable through environment variables or a
.env file at the project root:
- STUDYTRACKER_HOME: directory holding progress.db (default: ~/.studytracker)
- STUDYTRACKER_CATALOG: path to a courses YAML file
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


# Number of squares per type (lectures/sessions) for each course
SQUARES_PER_TYPE = 10

# Key of the single persisted progress blob
STORAGE_KEY = "studyTrackerProgress"

DEFAULT_DATA_DIR = Path(os.environ.get("STUDYTRACKER_HOME", Path.home() / ".studytracker"))
DEFAULT_PROGRESS_DB = DEFAULT_DATA_DIR / "progress.db"

BUNDLED_CATALOG_DIR = Path(__file__).parent / "data"
DEFAULT_CATALOG_PATH = Path(os.environ.get("STUDYTRACKER_CATALOG", BUNDLED_CATALOG_DIR / "courses.yaml"))

EXPORT_FILENAME = "study-progress-backup.json"
