from datetime import datetime

import pytest

from peertutor.db import create_db_and_tables, make_engine
from peertutor.store import TutorStore

# Wednesday noon; the Monday after is 2026-10-19
NOW = datetime(2026, 10, 14, 12, 0)


@pytest.fixture
def engine(tmp_path):
    # Ensure tests don't write to the repo root
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return TutorStore(engine)


@pytest.fixture
def tutor(store):
    return store.create_tutor("kathan", name="Kathan", password_hash="not-a-real-hash")


@pytest.fixture
def now():
    return NOW
