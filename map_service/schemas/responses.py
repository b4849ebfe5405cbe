"""
Response Schemas

Bodies returned by the map HTTP endpoints.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service_name: str
    version: str
    map_loaded: bool
    timestamp: str


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint"""
    error: str
    message: str


class SetMapResponse(BaseModel):
    """Acknowledgement for a stored map"""
    message: str = "Map successfully stored"
    node_count: int = Field(..., alias="nodeCount")
    edge_count: int = Field(..., alias="edgeCount")

    class Config:
        populate_by_name = True


class RouteResponse(BaseModel):
    """Shortest route between two nodes"""
    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    route: list[str] = Field(default_factory=list, description="Node ids from start to end")
    path: str = Field(..., description="Route rendered as a single string")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"from": "A", "to": "C", "route": ["A", "B", "C"], "path": "ABC"}
        }


class DistanceResponse(BaseModel):
    """Shortest distance between two nodes"""
    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    distance: int

    class Config:
        populate_by_name = True
