"""Shared fixtures for the training preview tests."""

from __future__ import annotations

import pytest

from factories import FakeTrainingDataSource
from training.sqlite_source import SqliteTrainingDataSource


@pytest.fixture
def fake_source_factory():
    return FakeTrainingDataSource


@pytest.fixture
def sqlite_source(tmp_path):
    src = SqliteTrainingDataSource(tmp_path / "league.sqlite3")
    src.init_db()
    return src
