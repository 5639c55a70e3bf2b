"""Pydantic models for graph payloads exchanged with the Graph Provider."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class GraphPayload(BaseModel):
    """Topology as served by /api/graph: node labels plus label pairs."""

    nodes: list[str] = Field(min_length=1)
    connections: list[list[str]] = Field(default_factory=list)

    @field_validator("connections")
    @classmethod
    def _pairs_only(cls, value: list[list[str]]) -> list[list[str]]:
        for pair in value:
            if len(pair) != 2:
                raise ValueError(f"connection must have exactly two labels, got {pair!r}")
        return value


class GraphSummary(BaseModel):
    node_count: int
    edge_count: int
    isolated_count: int = 0
    source: str = "default"
