from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class SAPRequest(BaseModel):
    """Request model for set-based ancestral path queries"""
    v: List[int] = Field(..., min_length=1, description="First set of vertex ids")
    w: List[int] = Field(..., min_length=1, description="Second set of vertex ids")
    include_path: bool = Field(default=False, description="Also return the vertices on the path")

    @field_validator('v', 'w')
    @classmethod
    def validate_vertices(cls, v: List[int]) -> List[int]:
        """
        Reject negative ids early; the upper bound depends on the loaded graph
        and is checked by the engine.
        """
        for vertex in v:
            if vertex < 0:
                raise ValueError("Vertex ids must be non-negative")
        return v


class Edge(BaseModel):
    """Graph edge for visualization"""
    from_: int = Field(..., alias="from")
    to: int

    class Config:
        populate_by_name = True


class SAPResponse(BaseModel):
    """Response model for a resolved query"""
    ancestor: Optional[int] = None
    length: int
    found: bool
    path: Optional[List[int]] = None
    edges: Optional[List[Edge]] = None


class GraphInfo(BaseModel):
    """Size of the loaded graph"""
    vertices: int
    edges: int


class CacheStats(BaseModel):
    """Query cache statistics"""
    size: int
    max_size: Optional[int] = None
    hits: int
    misses: int
    hit_rate: float
    total_requests: int
