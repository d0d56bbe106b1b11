#!/usr/bin/env python3
"""
tracker_admin.py - Operator commands for persisted study progress.

Export, import, erase and inspect progress without the Streamlit UI.

Usage:
  python scripts/tracker_admin.py stats
  python scripts/tracker_admin.py export --output backup.json
  python scripts/tracker_admin.py import backup.json
  python scripts/tracker_admin.py toggle calculus-3 lectures 0
  python scripts/tracker_admin.py reset-course calculus-3
  python scripts/tracker_admin.py reset-all --yes
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from studytracker.config import DEFAULT_CATALOG_PATH, DEFAULT_PROGRESS_DB
from studytracker.tracker import (
    AdminConsole,
    MutationEngine,
    ProgressStorage,
    StudyTrackerError,
)
from studytracker.tracker.admin import IMPORT_OK, RESET_OK
from studytracker.utils import load_catalog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_stats(engine: MutationEngine, args) -> int:
    """Log completion for every course and overall."""
    for course in engine.catalog.courses:
        stats = engine.course_completion(course.id)
        logger.info(f"  {course.display_title}: {stats.completed}/{stats.total} ({stats.percent}%)")
    total = engine.global_completion()
    logger.info("=" * 50)
    logger.info(f"Completed: {total.completed}")
    logger.info(f"Remaining: {total.remaining}")
    logger.info(f"Overall: {total.percent}%")
    return 0


def cmd_export(engine: MutationEngine, args) -> int:
    admin = AdminConsole(engine)
    if args.output:
        admin.export_to_file(args.output)
    else:
        print(admin.export_progress())
    return 0


def cmd_import(engine: MutationEngine, args) -> int:
    try:
        data = args.file.read_bytes()
    except OSError as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1
    message = AdminConsole(engine).import_progress(data)
    if message != IMPORT_OK:
        logger.error(message)
        return 1
    logger.info(message)
    return 0


def cmd_reset_all(engine: MutationEngine, args) -> int:
    def confirm(prompt: str) -> bool:
        if args.yes:
            return True
        answer = input(f"{prompt} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    message = AdminConsole(engine).reset_all_progress(confirm)
    logger.info(message)
    return 0 if message == RESET_OK else 1


def cmd_toggle(engine: MutationEngine, args) -> int:
    value = engine.toggle(args.course, args.type, args.index)
    stats = engine.course_completion(args.course)
    logger.info(
        f"{args.course} {args.type}[{args.index}] -> {'done' if value else 'not done'} "
        f"({stats.percent}%)"
    )
    return 0 if engine.persisted else 1


def cmd_reset_course(engine: MutationEngine, args) -> int:
    stats = engine.reset_course(args.course)
    logger.info(f"{args.course}: {stats.completed}/{stats.total} ({stats.percent}%)")
    return 0 if engine.persisted else 1


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Study tracker progress administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_PROGRESS_DB,
        help="Path to progress.db"
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help="Path to courses YAML"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("stats", help="Show completion per course and overall")

    p_export = sub.add_parser("export", help="Export progress as JSON")
    p_export.add_argument("--output", type=Path, default=None, help="Write to file instead of stdout")

    p_import = sub.add_parser("import", help="Import progress from a JSON file")
    p_import.add_argument("file", type=Path)

    p_reset_all = sub.add_parser("reset-all", help="Erase all persisted progress")
    p_reset_all.add_argument("--yes", action="store_true", help="Skip confirmation")

    p_toggle = sub.add_parser("toggle", help="Toggle one square")
    p_toggle.add_argument("course")
    p_toggle.add_argument("type", help="lectures or sessions")
    p_toggle.add_argument("index", type=int, help="0-based square index")

    p_reset_course = sub.add_parser("reset-course", help="Clear one course")
    p_reset_course.add_argument("course")

    return parser


COMMANDS = {
    "stats": cmd_stats,
    "export": cmd_export,
    "import": cmd_import,
    "reset-all": cmd_reset_all,
    "toggle": cmd_toggle,
    "reset-course": cmd_reset_course,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        catalog = load_catalog(args.catalog)
        engine = MutationEngine(ProgressStorage(catalog, args.db))
        return COMMANDS[args.command](engine, args)
    except StudyTrackerError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
