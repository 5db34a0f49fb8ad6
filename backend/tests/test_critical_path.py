from notebook_backend.graph import CriticalPath, build_graph, critical_path, longest_paths
from notebook_backend.models import TaskDependency


def _deps(*pairs):
    return [TaskDependency(from_task_id=a, to_task_id=b) for a, b in pairs]


def _graph(scope, *pairs):
    return build_graph(_deps(*pairs), nodes=scope)


def test_simple_chain():
    scope = ["T1", "T2", "T3"]
    result = critical_path(_graph(scope, ("T1", "T2"), ("T2", "T3")), scope)
    assert result.path == ["T1", "T2", "T3"]
    assert result.duration == 3


def test_chain_found_regardless_of_scope_order():
    scope = ["T3", "T2", "T1"]
    result = critical_path(_graph(scope, ("T1", "T2"), ("T2", "T3")), scope)
    assert result.path == ["T1", "T2", "T3"]
    assert result.duration == 3


def test_disjoint_tasks_have_unit_duration():
    scope = ["A", "B"]
    result = critical_path(_graph(scope), scope)
    assert result.duration == 1
    assert len(result.path) == 1
    assert result.path[0] in scope


def test_empty_scope_is_degenerate():
    assert critical_path(_graph([]), []) == CriticalPath(path=[], duration=0)


def test_longer_branch_wins_over_shortcut():
    scope = ["A", "B", "C"]
    result = critical_path(_graph(scope, ("A", "C"), ("A", "B"), ("B", "C")), scope)
    assert result.path == ["A", "B", "C"]
    assert result.duration == 3


def test_ties_follow_first_edge():
    scope = ["A", "B", "C"]
    result = critical_path(_graph(scope, ("A", "C"), ("A", "B")), scope)
    assert result.path == ["A", "C"]
    assert result.duration == 2


def test_edges_leaving_scope_are_ignored():
    scope = ["A", "B"]
    g = _graph(scope, ("A", "B"), ("B", "X"), ("X", "Y"))
    assert "X" not in g
    result = critical_path(g, scope)
    assert result.path == ["A", "B"]
    assert result.duration == 2


def test_longest_paths_memoizes_shared_tails():
    scope = ["A", "B", "C", "D"]
    g = _graph(scope, ("A", "C"), ("B", "C"), ("C", "D"))
    assert longest_paths(g, scope) == {"A": 3, "B": 3, "C": 2, "D": 1}


def test_cycle_written_out_of_band_terminates():
    scope = ["A", "B"]
    result = critical_path(_graph(scope, ("A", "B"), ("B", "A")), scope)
    # the back edge is skipped, so the cycle is only counted once around
    assert result.path == ["A", "B"]
    assert result.duration == 2


def test_deep_chain_does_not_recurse():
    n = 5000
    scope = [f"n{i}" for i in range(n)]
    g = _graph(scope, *((f"n{i}", f"n{i + 1}") for i in range(n - 1)))
    result = critical_path(g, scope)
    assert result.duration == n
    assert result.path[0] == "n0"
    assert result.path[-1] == f"n{n - 1}"
