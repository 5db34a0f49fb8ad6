"""In-memory dependency graph algorithms.

Graphs are rebuilt from store rows on every call and discarded afterwards.
"""

from .builder import build_graph
from .longest_path import CriticalPath, critical_path, longest_paths
from .cycles import would_create_cycle

__all__ = [
    "build_graph",
    "would_create_cycle",
    "longest_paths",
    "critical_path",
    "CriticalPath",
]
