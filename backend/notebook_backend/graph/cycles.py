from __future__ import annotations

from typing import Iterator

from networkx import DiGraph


def _successors(graph: DiGraph, node: str, from_task_id: str, to_task_id: str) -> Iterator[str]:
    if node in graph:
        yield from graph.successors(node)
    if node == from_task_id:
        # the proposed edge, not stored yet
        yield to_task_id


def would_create_cycle(graph: DiGraph, from_task_id: str, to_task_id: str) -> bool:
    """Return True if adding ``from_task_id -> to_task_id`` would leave a cycle.

    Depth-first search from ``to_task_id`` over the stored edges plus the
    proposed one. Reaching a node that is still on the DFS stack is a back
    edge, which covers the loop closed by the new edge as well as any cycle
    already reachable from ``to_task_id``. Runs in O(V + E) with an explicit
    stack, so deep chains do not hit the recursion limit.
    """
    if from_task_id == to_task_id:
        return True

    visited: set[str] = {to_task_id}
    on_stack: set[str] = {to_task_id}
    stack = [(to_task_id, _successors(graph, to_task_id, from_task_id, to_task_id))]

    while stack:
        node, successors = stack[-1]
        for succ in successors:
            if succ in on_stack:
                return True
            if succ in visited:
                continue
            visited.add(succ)
            on_stack.add(succ)
            stack.append((succ, _successors(graph, succ, from_task_id, to_task_id)))
            break
        else:
            stack.pop()
            on_stack.discard(node)

    return False
