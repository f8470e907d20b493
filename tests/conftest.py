import random

import pytest

from certprep.study.adapters.db_manager import DatabaseManager
from certprep.study.adapters.memory_storage import InMemoryKeyValueStorage
from certprep.study.adapters.performance_repository import PerformanceRepository
from certprep.study.adapters.sqlite_storage import SQLiteKeyValueStorage
from certprep.study.domain.performance import PerformanceUpdater
from tests.helpers.factories import FixedClock, make_question


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def updater(clock, seeded_rng):
    return PerformanceUpdater(clock=clock, rng=seeded_rng)


@pytest.fixture
def questions():
    """Twelve questions of the PMLE bank, already namespaced."""
    return [make_question(f"pmle-q-{i}") for i in range(1, 13)]


@pytest.fixture
def memory_storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def db_manager():
    """In-memory SQLite, closed after the test."""
    manager = DatabaseManager(db_path=":memory:")
    yield manager
    manager.close()


@pytest.fixture
def sqlite_storage(db_manager):
    return SQLiteKeyValueStorage(db_manager)


@pytest.fixture
def repository(memory_storage):
    return PerformanceRepository(memory_storage)
