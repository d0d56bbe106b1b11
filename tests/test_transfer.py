"""
Import/export tests, including the pad/truncate normalization policy.
"""

import json

import pytest

from studytracker.schemas import CourseProgress, ProgressStore
from studytracker.tracker import (
    ImportMalformedError,
    create_default_store,
    export_progress,
    import_progress,
)


class TestExport:

    def test_export_layout(self, catalog):
        data = json.loads(export_progress(create_default_store(catalog), catalog))
        assert list(data) == catalog.course_ids
        assert data["course-0"] == {"lectures": [False] * 10, "sessions": [False] * 10}

    def test_export_fills_absent_courses(self, catalog):
        store = ProgressStore(courses={"course-1": CourseProgress(lectures=[True] * 10, sessions=[False] * 10)})
        data = json.loads(export_progress(store, catalog))
        assert len(data) == 10
        assert data["course-5"]["sessions"] == [False] * 10
        assert data["course-1"]["lectures"] == [True] * 10

    def test_export_never_emits_short_sequences(self, catalog):
        store = ProgressStore(courses={"course-1": CourseProgress(lectures=[True], sessions=[])})
        data = json.loads(export_progress(store, catalog))
        assert data["course-1"]["lectures"] == [True] + [False] * 9
        assert len(data["course-1"]["sessions"]) == 10

    def test_export_is_indented(self, catalog):
        assert '\n  "course-0"' in export_progress(create_default_store(catalog), catalog)


class TestImport:

    def test_round_trip(self, catalog):
        store = create_default_store(catalog)
        store.courses["course-0"].lectures[3] = True
        store.courses["course-9"].sessions[9] = True

        assert import_progress(export_progress(store, catalog), catalog) == store

    def test_short_sequences_padded(self, catalog):
        text = json.dumps({"course-0": {"lectures": [True, True], "sessions": []}})
        store = import_progress(text, catalog)
        assert store.courses["course-0"].lectures == [True, True] + [False] * 8
        assert store.courses["course-0"].sessions == [False] * 10

    def test_long_sequences_truncated(self, catalog):
        text = json.dumps({"course-0": {"lectures": [True] * 15, "sessions": [False] * 12}})
        store = import_progress(text, catalog)
        assert store.courses["course-0"].lectures == [True] * 10
        assert store.courses["course-0"].has_shape(10)

    def test_missing_type_is_all_false(self, catalog):
        text = json.dumps({"course-0": {"sessions": [True] * 10}})
        store = import_progress(text, catalog)
        assert store.courses["course-0"].lectures == [False] * 10
        assert store.courses["course-0"].sessions == [True] * 10

    def test_unknown_courses_dropped_missing_filled(self, catalog):
        text = json.dumps({"old-course": {"lectures": [True], "sessions": [True]}})
        store = import_progress(text, catalog)
        assert "old-course" not in store.courses
        assert list(store.courses) == catalog.course_ids

    def test_empty_object_is_default(self, catalog):
        assert import_progress("{}", catalog) == create_default_store(catalog)

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        "[true, false]",
        "42",
        "null",
        json.dumps({"course-0": [True] * 10}),
        json.dumps({"course-0": {"lectures": "all", "sessions": []}}),
        json.dumps({"course-0": {"lectures": [1, 0], "sessions": []}}),
        json.dumps({"course-0": {"lectures": ["true"], "sessions": []}}),
        json.dumps({"course-0": {"lectures": [None], "sessions": []}}),
        "[" * 200000,
        b"\x80{}",
    ])
    def test_malformed_input_rejected(self, catalog, text):
        with pytest.raises(ImportMalformedError):
            import_progress(text, catalog)

    def test_malformed_is_value_error(self, catalog):
        with pytest.raises(ValueError):
            import_progress("{", catalog)

    def test_utf8_bytes_accepted(self, catalog):
        data = json.dumps({"course-2": {"lectures": [True], "sessions": []}}).encode("utf-8")
        store = import_progress(data, catalog)
        assert store.courses["course-2"].lectures == [True] + [False] * 9

    def test_invalid_utf8_bytes_rejected(self, catalog):
        with pytest.raises(ImportMalformedError, match="not valid JSON"):
            import_progress(b'{"course-0": "\xff"}', catalog)
