"""
Path Engine

Shortest routes and distances over the stored map using Dijkstra's
algorithm with a binary heap.

Edges are undirected and weights are non-negative integers. When several
pending nodes share the smallest tentative distance, the one with the
lexicographically smallest id is settled first, so routes are deterministic.
"""

import heapq
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import structlog

from ..errors import (
    InvalidGraphError,
    NodeNotFoundError,
    NoPathExistsError,
    UnexpectedFailureError,
)
from ..schemas.graph import Graph
from .graph_store import GraphStore

logger = structlog.get_logger(__name__)

# node id -> [(neighbour id, weight), ...]
Adjacency = Dict[str, List[Tuple[str, int]]]


@dataclass(frozen=True)
class ShortestPathResult:
    """
    Outcome of a single-pair Dijkstra run.

    The predecessor map omits the source because it has no parent. It may
    also hold entries for nodes settled before the target was reached.
    """
    source: str
    target: str
    distance: int
    previous: Dict[str, str]

    def route(self) -> List[str]:
        return reconstruct_route(self.previous, self.source, self.target)


def build_adjacency(graph: Graph) -> Adjacency:
    """
    Build an undirected adjacency list for the graph.

    Every edge is added in both directions. Parallel edges are all kept;
    the search picks the lightest one naturally.

    Raises:
        InvalidGraphError: an edge names a node that is not in the graph
    """
    adjacency: Adjacency = {node_id: [] for node_id in graph.node_ids()}

    for edge in graph.edges:
        for endpoint in (edge.from_id, edge.to_id):
            if endpoint not in adjacency:
                raise InvalidGraphError(
                    f"Edge {edge.from_id}-{edge.to_id} references unknown node '{endpoint}'"
                )
        adjacency[edge.from_id].append((edge.to_id, edge.weight))
        adjacency[edge.to_id].append((edge.from_id, edge.weight))

    return adjacency


def compute_shortest_path(graph: Graph, from_id: str, to_id: str) -> ShortestPathResult:
    """
    Run Dijkstra from from_id and stop as soon as to_id is settled.

    Args:
        graph: Map snapshot to search
        from_id: Start node id
        to_id: Destination node id

    Returns:
        ShortestPathResult with the distance and predecessor map

    Raises:
        NodeNotFoundError: from_id or to_id is not a node (from_id checked first)
        InvalidGraphError: an edge references an unknown node
        NoPathExistsError: to_id is unreachable from from_id
    """
    node_ids = set(graph.node_ids())
    if from_id not in node_ids:
        raise NodeNotFoundError(from_id, "from")
    if to_id not in node_ids:
        raise NodeNotFoundError(to_id, "to")

    adjacency = build_adjacency(graph)

    dist: Dict[str, float] = {node_id: math.inf for node_id in adjacency}
    dist[from_id] = 0
    prev: Dict[str, str] = {}
    pending = set(adjacency)
    pq = [(0, from_id)]  # (distance, node id); the id breaks ties

    while pq:
        d_u, u = heapq.heappop(pq)

        # Skip outdated entries
        if u not in pending or d_u != dist[u]:
            continue

        if u == to_id:
            break

        pending.discard(u)

        for v, w in adjacency[u]:
            if v not in pending:
                continue
            alt = d_u + w
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u
                heapq.heappush(pq, (alt, v))

    if dist[to_id] == math.inf:
        raise NoPathExistsError(from_id, to_id)

    return ShortestPathResult(
        source=from_id,
        target=to_id,
        distance=int(dist[to_id]),
        previous=prev,
    )


def reconstruct_route(previous: Dict[str, str], from_id: str, to_id: str) -> List[str]:
    """
    Walk predecessors back from to_id and return the route from_id -> to_id.

    Raises:
        UnexpectedFailureError: the walk does not end at from_id
    """
    route = [to_id]
    current = to_id
    while current in previous:
        current = previous[current]
        route.append(current)

    if current != from_id:
        raise UnexpectedFailureError(
            f"Predecessor chain from {to_id} ended at {current}, expected {from_id}"
        )

    route.reverse()
    return route


class PathEngine:
    """
    Answers shortest-path queries against whatever map the store holds.

    Each query takes one snapshot of the map at its start and works on that
    snapshot only, so a concurrent SetMap cannot affect a running query.
    """

    def __init__(self, store: GraphStore, route_separator: str = ""):
        """
        Initialize path engine.

        Args:
            store: Graph store to read the active map from
            route_separator: Separator used when rendering a route as text
        """
        self.store = store
        self.route_separator = route_separator

    def compute(self, from_id: str, to_id: str) -> ShortestPathResult:
        """Run the shared computation against the current map."""
        graph = self.store.snapshot()
        return compute_shortest_path(graph, from_id, to_id)

    def shortest_distance(self, from_id: str, to_id: str) -> int:
        result = self.compute(from_id, to_id)

        logger.info(
            "Shortest distance computed",
            from_id=from_id,
            to_id=to_id,
            distance=result.distance,
        )
        return result.distance

    def shortest_route(self, from_id: str, to_id: str) -> List[str]:
        result = self.compute(from_id, to_id)
        route = result.route()

        logger.info(
            "Shortest route computed",
            from_id=from_id,
            to_id=to_id,
            hops=len(route) - 1,
            distance=result.distance,
        )
        return route

    def render_route(self, route: List[str]) -> str:
        """Render a route as text, e.g. ["A", "B", "C"] -> "ABC"."""
        return self.route_separator.join(route)
