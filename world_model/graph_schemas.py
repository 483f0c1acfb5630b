"""Graph data models shared by the store and the command surface."""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, Field


class Node(BaseModel):
    """Point on the canvas."""

    id: int = Field(ge=0)
    x: float
    y: float


class Edge(BaseModel):
    """Connection between two node ids."""

    id: int = Field(ge=0)
    source: int = Field(ge=0)
    target: int = Field(ge=0)

    def touches(self, node_id: int) -> bool:
        return self.source == node_id or self.target == node_id


class GraphSnapshot(NamedTuple):
    """Detached copy of the graph in insertion order."""

    nodes: list[Node]
    edges: list[Edge]

    def to_payload(self) -> dict[str, list[dict[str, Any]]]:
        """Plain-dict form handed to the presentation layer."""
        return {
            "nodes": [node.model_dump() for node in self.nodes],
            "edges": [edge.model_dump() for edge in self.edges],
        }


class LayoutSettings(BaseModel):
    """Circle used by the align operation."""

    radius: float = Field(default=150.0, gt=0)
    center_x: float = 200.0
    center_y: float = 200.0


class CanvasSettings(BaseModel):
    """Area random nodes are scattered over."""

    width: float = Field(default=400.0, gt=0)
    height: float = Field(default=400.0, gt=0)


class GraphSettings(BaseModel):
    """Tunable constants for generators and layout."""

    grid_spacing: float = 50.0
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    edge_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    seed: int | None = None
