import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from api.main import create_app  # noqa: E402
from db import init_db, make_engine, make_session_factory  # noqa: E402
from repositories import InMemoryBookStore, SqlBookStore  # noqa: E402


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sql_store(session_factory, clock):
    return SqlBookStore(session_factory, clock=clock)


@pytest.fixture
def memory_store():
    return InMemoryBookStore()


@pytest.fixture
def client(sql_store):
    return TestClient(create_app(sql_store))


@pytest.fixture
def memory_client(memory_store):
    return TestClient(create_app(memory_store))
