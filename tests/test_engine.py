"""
Mutation engine tests: toggle, reset and the persist/render cycle.
"""

import sqlite3

import pytest

from studytracker.schemas import CourseProgress, ProgressStore, SquareType
from studytracker.tracker import (
    CourseCompletion,
    GlobalIndicator,
    InvalidIndexError,
    InvalidTypeError,
    MutationEngine,
    ProgressStorage,
    StoreNotLoadedError,
    UnknownCourseError,
    create_default_store,
    reset_course,
    toggle_square,
)


class TestToggleSquare:

    def test_toggle_sets_and_returns_flag(self, catalog):
        store = create_default_store(catalog)
        assert toggle_square(store, catalog, "course-1", "lectures", 4) is True
        assert store.courses["course-1"].lectures[4] is True

    def test_toggle_twice_restores_store(self, catalog):
        store = create_default_store(catalog)
        store.courses["course-2"].sessions[1] = True
        before = store.model_dump()

        toggle_square(store, catalog, "course-2", SquareType.SESSIONS, 7)
        toggle_square(store, catalog, "course-2", SquareType.SESSIONS, 7)

        assert store.model_dump() == before

    def test_toggle_only_changes_target(self, catalog):
        store = create_default_store(catalog)
        toggle_square(store, catalog, "course-0", "sessions", 9)
        assert store.courses["course-0"].completed_count() == 1
        assert sum(p.completed_count() for p in store.courses.values()) == 1

    def test_toggle_materializes_absent_course(self, catalog):
        store = ProgressStore()
        toggle_square(store, catalog, "course-3", "lectures", 0)
        assert store.courses["course-3"].lectures == [True] + [False] * 9
        assert store.courses["course-3"].sessions == [False] * 10

    def test_unknown_course_rejected(self, catalog):
        store = create_default_store(catalog)
        before = store.model_dump()
        with pytest.raises(UnknownCourseError):
            toggle_square(store, catalog, "nonexistent-course", "lectures", 0)
        assert store.model_dump() == before
        assert "nonexistent-course" not in store.courses

    def test_unknown_course_is_key_error(self, catalog):
        with pytest.raises(KeyError):
            toggle_square(ProgressStore(), catalog, "nonexistent-course", "lectures", 0)

    @pytest.mark.parametrize("square_type", ["labs", "Lectures", "", None])
    def test_invalid_type_rejected(self, catalog, square_type):
        store = create_default_store(catalog)
        before = store.model_dump()
        with pytest.raises(InvalidTypeError):
            toggle_square(store, catalog, "course-0", square_type, 0)
        assert store.model_dump() == before

    @pytest.mark.parametrize("index", [-1, 10, 99, True, "1", 1.0])
    def test_invalid_index_rejected(self, catalog, index):
        store = create_default_store(catalog)
        before = store.model_dump()
        with pytest.raises(InvalidIndexError):
            toggle_square(store, catalog, "course-0", "lectures", index)
        assert store.model_dump() == before

    def test_invalid_index_does_not_materialize_course(self, catalog):
        store = ProgressStore()
        with pytest.raises(InvalidIndexError):
            toggle_square(store, catalog, "course-0", "lectures", 10)
        assert store.courses == {}


class TestResetCourse:

    def test_reset_full_course(self, catalog):
        store = create_default_store(catalog)
        store.courses["course-4"] = CourseProgress(lectures=[True] * 10, sessions=[True] * 10)

        reset_course(store, catalog, "course-4")

        assert store.courses["course-4"] == CourseProgress.empty(10)

    def test_reset_absent_course(self, catalog):
        store = ProgressStore()
        reset_course(store, catalog, "course-4")
        assert store.courses["course-4"] == CourseProgress.empty(10)

    def test_reset_unknown_course(self, catalog):
        with pytest.raises(UnknownCourseError):
            reset_course(ProgressStore(), catalog, "nonexistent-course")


class TestMutationEngine:

    def test_toggle_persists(self, engine, storage):
        engine.toggle("course-1", "lectures", 2)
        assert storage.load().courses["course-1"].lectures[2] is True
        assert engine.persisted is True

    def test_toggle_renders(self, engine, board):
        engine.toggle("course-1", "lectures", 2)
        assert board.is_completed("course-1", "lectures", 2)
        assert board.course_indicators["course-1"].text == "5%"
        assert board.global_indicators[GlobalIndicator.COMPLETED] == "1"
        assert board.global_indicators[GlobalIndicator.REMAINING] == "199"
        assert board.global_indicators[GlobalIndicator.PERCENT] == "1%"

    def test_toggle_twice_clears_square(self, engine, board):
        engine.toggle("course-1", "sessions", 0)
        assert engine.toggle("course-1", "sessions", 0) is False
        assert not board.is_completed("course-1", "sessions", 0)
        assert board.course_indicators["course-1"].width == "0%"

    def test_failed_toggle_changes_nothing(self, engine, board, storage):
        before = board.snapshot()
        with pytest.raises(UnknownCourseError):
            engine.toggle("nonexistent-course", "lectures", 0)
        assert board.snapshot() == before
        assert not storage.exists()

    def test_reset_course(self, engine, board):
        for square_type in SquareType:
            for index in range(10):
                engine.toggle("course-7", square_type, index)
        assert engine.course_completion("course-7") == CourseCompletion(20, 20, 100)

        stats = engine.reset_course("course-7")

        assert stats == CourseCompletion(completed=0, total=20, percent=0)
        assert engine.store.courses["course-7"] == CourseProgress.empty(10)
        assert not any(board.is_completed("course-7", "lectures", i) for i in range(10))
        assert board.course_indicators["course-7"].text == "0%"
        assert board.global_indicators[GlobalIndicator.COMPLETED] == "0"

    def test_loads_existing_progress_on_start(self, storage, synchronizer, board):
        store = storage.create_default()
        store.courses["course-0"].lectures[0] = True
        storage.save(store)

        engine = MutationEngine(storage, synchronizer)

        assert engine.is_completed("course-0", "lectures", 0)
        assert board.is_completed("course-0", "lectures", 0)

    def test_headless_engine(self, storage):
        engine = MutationEngine(storage)
        engine.toggle("course-0", "sessions", 5)
        assert engine.global_completion().completed == 1

    def test_save_failure_keeps_memory_state(self, tmp_path, catalog, monkeypatch):
        notices = []
        storage = ProgressStorage(catalog, tmp_path / "progress.db", notify=notices.append)
        engine = MutationEngine(storage)

        def full_disk(value):
            raise sqlite3.OperationalError("database or disk is full")

        monkeypatch.setattr(storage, "_write_value", full_disk)
        engine.toggle("course-0", "lectures", 0)

        assert engine.persisted is False
        assert engine.is_completed("course-0", "lectures", 0)
        assert len(notices) == 1
        monkeypatch.undo()
        assert not storage.load().courses["course-0"].lectures[0]

    def test_course_completion_unknown_course(self, engine):
        with pytest.raises(UnknownCourseError):
            engine.course_completion("nonexistent-course")

    def test_erase_requires_reload(self, engine, storage):
        engine.toggle("course-0", "lectures", 0)
        assert engine.erase_all() is True

        assert not engine.is_loaded
        with pytest.raises(StoreNotLoadedError):
            engine.toggle("course-0", "lectures", 1)
        assert not storage.exists()

        engine.reload()
        assert engine.store == storage.create_default()
        assert not storage.exists()

    def test_failed_erase_keeps_store_loaded(self, engine, storage, monkeypatch):
        engine.toggle("course-0", "lectures", 0)

        def locked():
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(storage, "_delete_value", locked)
        assert engine.erase_all() is False
        assert engine.is_loaded
        assert engine.is_completed("course-0", "lectures", 0)
