"""
Map Service Tools

Graph store and shortest-path engine.
"""

from .graph_store import GraphStore
from .path_engine import (
    PathEngine,
    ShortestPathResult,
    build_adjacency,
    compute_shortest_path,
    reconstruct_route,
)

__all__ = [
    "GraphStore",
    "PathEngine",
    "ShortestPathResult",
    "build_adjacency",
    "compute_shortest_path",
    "reconstruct_route",
]
