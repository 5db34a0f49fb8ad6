import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session

from notebook_backend.errors import DuplicateError, NotFoundError, StoreUnavailable
from notebook_backend.models import DependencyType, Task, TaskDependency
from notebook_backend.repo import TaskGraphStore


def _link(store, a, b, kind=DependencyType.BLOCKS):
    return store.insert_dependency(
        TaskDependency(from_task_id=a, to_task_id=b, dependency_type=kind)
    )


def test_insert_and_filter(store, make_tasks):
    a, b, c = make_tasks("a", "b", "c")
    ab = _link(store, a, b)
    _link(store, b, c, DependencyType.REQUIRES)

    assert ab.id
    assert len(store.list_dependencies()) == 2
    assert [d.to_task_id for d in store.list_dependencies(from_task_id=a)] == [b]
    assert [d.from_task_id for d in store.list_dependencies(to_task_id=c)] == [b]
    assert store.list_dependencies(from_task_id=a, to_task_id=c) == []
    assert {d.from_task_id for d in store.list_dependencies(from_task_ids=[a, b])} == {a, b}
    assert store.list_dependencies(from_task_ids=[]) == []
    assert store.get_dependency(ab.id).to_task_id == b


def test_duplicate_edge_rejected_whatever_the_type(store, make_tasks):
    a, b = make_tasks("a", "b")
    _link(store, a, b)
    with pytest.raises(DuplicateError):
        _link(store, a, b, DependencyType.SUGGESTS)
    assert len(store.list_dependencies()) == 1


def test_delete_twice(store, make_tasks):
    a, b = make_tasks("a", "b")
    dep = _link(store, a, b)
    store.delete_dependency(dep.id)
    assert store.get_dependency(dep.id) is None
    with pytest.raises(NotFoundError):
        store.delete_dependency(dep.id)


def test_get_tasks_omits_unknown_ids(store, make_tasks):
    (a,) = make_tasks("a")
    tasks = store.get_tasks([a, "nonexistent", a])
    assert [t.id for t in tasks] == [a]
    assert store.get_tasks([]) == []


def test_store_failure_is_wrapped(broken_engine):
    store = TaskGraphStore(broken_engine)
    with pytest.raises(StoreUnavailable) as exc_info:
        store.list_dependencies()
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
    with pytest.raises(StoreUnavailable):
        store.get_tasks(["a"])


def test_default_engine_comes_from_db_module(monkeypatch, engine):
    import notebook_backend.db as db

    monkeypatch.setattr(db, "engine", engine)
    assert TaskGraphStore().engine is engine


def _failing_commit(self):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


def test_failed_insert_is_wrapped_and_leaves_no_row(monkeypatch, store, make_tasks):
    a, b = make_tasks("a", "b")
    with monkeypatch.context() as mp:
        mp.setattr(Session, "commit", _failing_commit)
        with pytest.raises(StoreUnavailable) as exc_info:
            _link(store, a, b)
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert store.list_dependencies() == []


def test_failed_delete_is_wrapped_and_keeps_row(monkeypatch, store, make_tasks):
    a, b = make_tasks("a", "b")
    dep = _link(store, a, b)
    with monkeypatch.context() as mp:
        mp.setattr(Session, "commit", _failing_commit)
        with pytest.raises(StoreUnavailable):
            store.delete_dependency(dep.id)
    assert store.get_dependency(dep.id) is not None


def test_timestamps_are_timezone_aware(store, make_tasks):
    assert Task(title="x").created_at.tzinfo is not None
    assert TaskDependency(from_task_id="a", to_task_id="b").created_at.tzinfo is not None
    # rows with default timestamps can be written and read back
    a, b = make_tasks("a", "b")
    dep = _link(store, a, b)
    assert store.get_dependency(dep.id).created_at is not None
