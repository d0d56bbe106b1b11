"""
AdminConsole - Operator actions outside the normal toggle/reset flow.

Export, import and erase-all, returning status messages for display.
"""

import logging
from pathlib import Path
from typing import Callable

from studytracker.config import EXPORT_FILENAME

from .engine import MutationEngine
from .errors import ImportMalformedError
from .transfer import export_progress, import_progress

logger = logging.getLogger(__name__)

RESET_ALL_PROMPT = "Are you sure you want to delete all progress? This cannot be undone."

EXPORT_OK = "Progress exported successfully!"
IMPORT_OK = "Progress imported successfully!"
IMPORT_NOT_SAVED = "Progress imported, but it could not be saved."
IMPORT_FAILED = "Error importing progress"
RESET_OK = "All progress has been reset"
RESET_FAILED = "Could not erase saved progress"
CANCELLED = "Cancelled"


class AdminConsole:
    """Administrative operations on a MutationEngine session."""

    def __init__(self, engine: MutationEngine):
        self.engine = engine

    def export_progress(self) -> str:
        """Current progress as JSON text."""
        text = export_progress(self.engine.store, self.engine.catalog)
        logger.info(f"Exported progress for {len(self.engine.catalog.course_ids)} courses")
        return text

    def export_to_file(self, path: Path | None = None) -> Path:
        """Write the export to a file (default: study-progress-backup.json)."""
        output = Path(path) if path else Path(EXPORT_FILENAME)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(self.export_progress())
        logger.info(f"Saved progress backup to: {output}")
        return output

    def import_progress(self, text: str | bytes) -> str:
        """
        Replace all progress with imported JSON.

        Malformed input leaves both the session and persisted state untouched.

        Returns:
            Status message for the operator
        """
        try:
            store = import_progress(text, self.engine.catalog)
        except ImportMalformedError as e:
            logger.error(f"Error importing progress: {e}")
            return f"{IMPORT_FAILED}: {e}"

        if not self.engine.replace_store(store):
            return IMPORT_NOT_SAVED
        return IMPORT_OK

    def reset_all_progress(self, confirm: Callable[[str], bool]) -> str:
        """
        Erase all persisted progress after confirmation.

        The session must be reloaded afterwards (MutationEngine.reload).

        Args:
            confirm: Asked with RESET_ALL_PROMPT; erasing happens only on True
        """
        if not confirm(RESET_ALL_PROMPT):
            return CANCELLED
        if not self.engine.erase_all():
            return RESET_FAILED
        return RESET_OK
