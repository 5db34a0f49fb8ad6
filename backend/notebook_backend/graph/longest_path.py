from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from networkx import DiGraph

# Every task counts as one step; per-task estimates are not modelled.
UNIT_DURATION = 1


@dataclass
class CriticalPath:
    """Longest dependency chain within a scope."""

    path: list[str] = field(default_factory=list)
    duration: int = 0


def longest_paths(graph: DiGraph, scope: Sequence[str]) -> dict[str, int]:
    """Return the longest-chain length starting at each node reachable from *scope*.

    ``length(v) = 1 + max(length(w) for w in successors(v))``, memoized so
    each node and edge is processed once. A successor that is on the current
    DFS stack belongs to a cycle written around the cycle check; it is skipped,
    which keeps the walk finite but under-counts that cycle.
    """
    memo: dict[str, int] = {}

    for root in scope:
        if root in memo or root not in graph:
            continue
        on_stack = {root}
        # frame: [node, successor iterator, best successor length so far]
        stack: list[list] = [[root, iter(graph.successors(root)), 0]]
        while stack:
            frame = stack[-1]
            for succ in frame[1]:
                if succ in memo:
                    frame[2] = max(frame[2], memo[succ])
                    continue
                if succ in on_stack:
                    continue
                on_stack.add(succ)
                stack.append([succ, iter(graph.successors(succ)), 0])
                break
            else:
                stack.pop()
                node = frame[0]
                on_stack.discard(node)
                memo[node] = UNIT_DURATION + frame[2]
                if stack:
                    stack[-1][2] = max(stack[-1][2], memo[node])

    return memo


def critical_path(graph: DiGraph, scope: Sequence[str]) -> CriticalPath:
    """Compute the critical path of *graph* restricted to *scope*.

    The start is the first scope node with the greatest chain length. From
    there the path greedily follows the successor with the longest remaining
    chain, taking the first such edge in graph order on ties.
    """
    lengths = longest_paths(graph, scope)
    if not lengths:
        return CriticalPath()

    start = None
    for node in scope:
        if node in lengths and (start is None or lengths[node] > lengths[start]):
            start = node

    path = [start]
    seen = {start}
    node = start
    while True:
        best = None
        for succ in graph.successors(node):
            if succ in seen or succ not in lengths:
                continue
            if best is None or lengths[succ] > lengths[best]:
                best = succ
        if best is None:
            break
        path.append(best)
        seen.add(best)
        node = best

    return CriticalPath(path=path, duration=lengths[start])
