import pytest
from sqlmodel import create_engine

from notebook_backend.db import init_db
from notebook_backend.repo import TaskGraphStore
from notebook_backend.services.dependency_service import DependencyService


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path}/test.db")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def broken_engine(tmp_path):
    # sqlite cannot create a database file inside a missing directory
    eng = create_engine(f"sqlite:///{tmp_path}/missing/dir/test.db")
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    return TaskGraphStore(engine)


@pytest.fixture
def service(store):
    return DependencyService(store)


@pytest.fixture
def make_tasks(store):
    """Create tasks by title and return their ids in the same order."""

    def _make(*titles, **fields):
        return [store.add_task(title=title, **fields).id for title in titles]

    return _make
