"""
Graph Schemas

Pydantic models for the stored map and the payload accepted by SetMap.
Stored graphs are frozen and hold tuples, so a snapshot handed to a reader
can never change underneath it.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..errors import InvalidGraphError


class Node(BaseModel):
    """A node of the map. Extra display attributes are kept but ignored."""
    id: str = Field(..., description="Unique, case-sensitive node identifier")
    name: Optional[str] = Field(None, description="Display name")

    class Config:
        frozen = True
        extra = "allow"


class Edge(BaseModel):
    """An undirected, weighted connection between two nodes"""
    from_id: str = Field(..., alias="fromId")
    to_id: str = Field(..., alias="toId")
    weight: int = Field(..., ge=0, description="Non-negative edge weight")

    class Config:
        frozen = True
        populate_by_name = True


class Graph(BaseModel):
    """
    The stored map.

    Node order is insertion order and carries no meaning for path finding.
    Edge endpoints are not checked against the node list here; the path
    engine does that at query time.
    """
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...] = ()

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
                "edges": [
                    {"fromId": "A", "toId": "B", "weight": 1},
                    {"fromId": "B", "toId": "C", "weight": 2},
                    {"fromId": "A", "toId": "C", "weight": 5},
                ],
            }
        }

    def node_ids(self) -> list[str]:
        """Node identifiers in insertion order."""
        return [node.id for node in self.nodes]


class GraphPayload(BaseModel):
    """
    Map as submitted by a caller.

    Both collections are optional at parse time so that a missing one is
    reported as an InvalidGraph error with a precise message instead of a
    generic parse failure.
    """
    nodes: Optional[list[Node]] = None
    edges: Optional[list[Edge]] = None

    def to_graph(self) -> Graph:
        """
        Validate the payload and freeze it into a Graph.

        Raises:
            InvalidGraphError: no nodes, edges missing, or duplicate node ids
        """
        if not self.nodes:
            raise InvalidGraphError("Map must contain at least one node")

        if self.edges is None:
            raise InvalidGraphError("Map must contain edges")

        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise InvalidGraphError(f"Duplicate node id '{node.id}'")
            seen.add(node.id)

        return Graph(nodes=tuple(self.nodes), edges=tuple(self.edges))
