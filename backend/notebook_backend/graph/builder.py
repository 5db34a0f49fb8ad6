from __future__ import annotations

from typing import Iterable, Optional

from networkx import DiGraph

from notebook_backend.models import TaskDependency


def build_graph(
    dependencies: Iterable[TaskDependency],
    nodes: Optional[Iterable[str]] = None,
) -> DiGraph:
    """Return dependency graph for the given rows.

    Edges point from the dependent task to the task it depends on, and each
    node's successors keep the order in which the rows were supplied. When
    *nodes* is given the graph is induced on those ids: rows with an endpoint
    outside the set are skipped.
    """
    g = DiGraph()
    allowed = None
    if nodes is not None:
        allowed = set()
        for node in nodes:
            g.add_node(node)
            allowed.add(node)

    for dep in dependencies:
        if allowed is not None and (
            dep.from_task_id not in allowed or dep.to_task_id not in allowed
        ):
            continue
        g.add_edge(dep.from_task_id, dep.to_task_id, id=dep.id, kind=dep.dependency_type)

    return g
