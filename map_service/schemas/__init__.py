"""
Map Service Schemas

Pydantic models for the stored map and HTTP bodies.
"""

from .graph import Node, Edge, Graph, GraphPayload
from .responses import (
    HealthResponse,
    ErrorResponse,
    SetMapResponse,
    RouteResponse,
    DistanceResponse,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphPayload",
    "HealthResponse",
    "ErrorResponse",
    "SetMapResponse",
    "RouteResponse",
    "DistanceResponse",
]
