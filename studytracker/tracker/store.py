"""
ProgressStorage - Persist course progress in ~/.studytracker/progress.db.

The whole progress store is kept as one JSON blob under a fixed key in a
small SQLite key-value table:
- load() never raises; unreadable data falls back to the default store
- save() reports failures through a notify callback and returns False
- erase() removes the blob (full reset)
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from studytracker.config import DEFAULT_PROGRESS_DB, STORAGE_KEY
from studytracker.schemas import Catalog, CourseProgress, ProgressStore

from .errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save progress. Storage may be full."
ERASE_FAILED_MESSAGE = "Could not erase saved progress."


def create_default_store(catalog: Catalog) -> ProgressStore:
    """One all-false CourseProgress per catalog course."""
    return ProgressStore(courses={
        course_id: CourseProgress.empty(catalog.squares_per_type)
        for course_id in catalog.course_ids
    })


def parse_persisted_blob(payload: str, catalog: Catalog) -> ProgressStore:
    """
    Decode a persisted blob into a full-shape store.

    Unknown course ids are ignored and catalog courses missing from the
    blob are all-false. Any decoding or shape problem rejects the whole blob.

    Raises:
        StorageReadError: If the blob is not a valid progress mapping
    """
    try:
        raw = json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise StorageReadError(f"Persisted progress is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise StorageReadError(
            f"Persisted progress must be an object, got {type(raw).__name__}"
        )

    k = catalog.squares_per_type
    courses = {}
    for course_id in catalog.course_ids:
        if course_id not in raw:
            courses[course_id] = CourseProgress.empty(k)
            continue
        entry = raw[course_id]
        try:
            progress = CourseProgress.model_validate(entry)
        except ValidationError as e:
            raise StorageReadError(f"Invalid progress for {course_id}: {e}") from e
        if not progress.has_shape(k):
            raise StorageReadError(
                f"Invalid progress for {course_id}: expected {k} squares per type"
            )
        courses[course_id] = progress

    unknown = set(raw) - set(catalog.course_ids)
    if unknown:
        logger.debug(f"Ignoring unknown courses in persisted progress: {sorted(unknown)}")

    return ProgressStore(courses=courses)


class ProgressStorage:
    """
    Load and save the progress store in a SQLite key-value table.

    Each method opens its own connection, so the object can live in a
    long-running UI session without holding the database open.
    """

    def __init__(
        self,
        catalog: Catalog,
        db_path: Optional[Path] = None,
        key: str = STORAGE_KEY,
        notify: Optional[Callable[[StorageWriteError], None]] = None,
    ):
        """
        Initialize progress storage.

        Args:
            catalog: Course catalog defining valid courses and squares per type
            db_path: Path to progress.db (default: ~/.studytracker/progress.db)
            key: Key of the progress blob
            notify: Called with the error when a save fails (blocking user notice)
        """
        self.catalog = catalog
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.key = key
        self.notify = notify
        try:
            self._ensure_database()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error preparing progress database {self.db_path}: {e}")

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _read_value(self) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self.key,)
            )
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def _write_value(self, value: str):
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO kv_store (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (self.key, value)
            )
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Store lifecycle
    # -------------------------------------------------------------------------

    def create_default(self) -> ProgressStore:
        """Default store: every catalog course present, all squares incomplete."""
        return create_default_store(self.catalog)

    def load(self) -> ProgressStore:
        """
        Load the progress store.

        Returns the default store when nothing is persisted or the persisted
        blob cannot be read. A corrupt blob is discarded entirely.
        """
        try:
            payload = self._read_value()
            if payload is None:
                return self.create_default()
            return parse_persisted_blob(payload, self.catalog)
        except sqlite3.Error as e:
            error = StorageReadError(f"Error reading progress database: {e}")
        except StorageReadError as e:
            error = e
        logger.error(f"Error reading saved progress, using empty progress: {error}")
        return self.create_default()

    def save(self, store: ProgressStore) -> bool:
        """
        Persist the full store.

        Returns:
            True if written. False if the write failed; the failure has been
            logged and passed to notify, and the caller must not assume the
            state is durable.
        """
        payload = json.dumps(store.to_blob())
        try:
            self._ensure_database()
            self._write_value(payload)
            return True
        except (sqlite3.Error, OSError) as e:
            error = StorageWriteError(f"{SAVE_FAILED_MESSAGE} ({e})")
            logger.error(f"Error saving progress: {e}")
            if self.notify:
                self.notify(error)
            return False

    def exists(self) -> bool:
        """Check if a progress blob is persisted."""
        try:
            return self._read_value() is not None
        except sqlite3.Error as e:
            logger.error(f"Error reading progress database: {e}")
            return False

    def _delete_value(self):
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (self.key,))
            conn.commit()
        finally:
            conn.close()

    def erase(self) -> bool:
        """
        Delete the persisted progress blob (irreversible).

        Returns:
            True if erased. False if the delete failed; the failure has been
            logged and passed to notify, and the blob may still exist.
        """
        try:
            self._delete_value()
        except (sqlite3.Error, OSError) as e:
            error = StorageWriteError(f"{ERASE_FAILED_MESSAGE} ({e})")
            logger.error(f"Error erasing progress: {e}")
            if self.notify:
                self.notify(error)
            return False
        logger.info(f"Erased persisted progress '{self.key}' in {self.db_path}")
        return True
