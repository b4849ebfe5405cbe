"""
Graph Store

Holds the single active map for the process.
"""

import threading
from typing import Optional

import structlog

from ..errors import MapNotSetError
from ..schemas.graph import Graph

logger = structlog.get_logger(__name__)


class GraphStore:
    """
    In-memory holder for zero or one Graph.

    Graphs are immutable, so replacing the map is a reference swap done
    under a lock. Readers get either the previous graph or the new one,
    never a mix of the two.
    """

    def __init__(self, graph: Optional[Graph] = None):
        self._graph: Optional[Graph] = graph
        self._lock = threading.Lock()

    def set_map(self, graph: Graph) -> None:
        """Replace the stored map. The previous one is discarded."""
        with self._lock:
            self._graph = graph

        logger.info(
            "Map stored",
            node_count=len(graph.nodes),
            edge_count=len(graph.edges),
        )

    def get_map(self) -> Optional[Graph]:
        """Return the stored map, or None if no map has been set."""
        with self._lock:
            return self._graph

    def has_map(self) -> bool:
        with self._lock:
            return self._graph is not None

    def snapshot(self) -> Graph:
        """
        Return the stored map for a computation.

        Raises:
            MapNotSetError: no map has been set yet
        """
        graph = self.get_map()
        if graph is None:
            raise MapNotSetError()
        return graph
