"""
Map Service

Stores a single weighted, undirected map in memory and answers shortest
route and distance queries over it.

Example:
    from map_service import GraphStore, PathEngine
    from map_service.schemas import GraphPayload

    store = GraphStore()
    store.set_map(GraphPayload(
        nodes=[{"id": "A"}, {"id": "B"}],
        edges=[{"fromId": "A", "toId": "B", "weight": 4}],
    ).to_graph())

    engine = PathEngine(store)
    engine.shortest_route("A", "B")     # ["A", "B"]
    engine.shortest_distance("A", "B")  # 4

Run the HTTP API with: python -m map_service.main
"""

from .config_loader import load_config, Config
from .errors import (
    ErrorKind,
    MapServiceError,
    MapNotSetError,
    InvalidGraphError,
    NodeNotFoundError,
    NoPathExistsError,
    UnexpectedFailureError,
)
from .tools.graph_store import GraphStore
from .tools.path_engine import PathEngine

__version__ = "1.0.0"

__all__ = [
    "load_config",
    "Config",
    "ErrorKind",
    "MapServiceError",
    "MapNotSetError",
    "InvalidGraphError",
    "NodeNotFoundError",
    "NoPathExistsError",
    "UnexpectedFailureError",
    "GraphStore",
    "PathEngine",
]
