"""Shared fixtures for StudyTracker tests."""

import pytest

from studytracker.schemas import Catalog
from studytracker.tracker import MutationEngine, ProgressStorage, ViewSynchronizer
from studytracker.viewer import BoardView


COURSE_IDS = [f"course-{i}" for i in range(10)]


@pytest.fixture
def catalog():
    """Ten courses, ten squares per type."""
    return Catalog.from_ids(COURSE_IDS, squares_per_type=10)


@pytest.fixture
def storage(tmp_path, catalog):
    return ProgressStorage(catalog, tmp_path / "progress.db")


@pytest.fixture
def board(catalog):
    return BoardView(catalog)


@pytest.fixture
def synchronizer(board, catalog):
    return ViewSynchronizer(board, catalog)


@pytest.fixture
def engine(storage, synchronizer):
    return MutationEngine(storage, synchronizer)
