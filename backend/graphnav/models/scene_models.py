"""Pydantic models for layout configuration and render-facing scene frames."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class NavigationCommand(str, Enum):
    SELECT_PREVIOUS = "select_previous"
    SELECT_NEXT = "select_next"
    COMMIT_FORWARD = "commit_forward"
    COMMIT_BACKWARD = "commit_backward"


class TransitionKind(str, Enum):
    MOVE = "move"
    ROTATE = "rotate"


class NodeRole(str, Enum):
    CURRENT = "current"
    TARGET = "target"
    NEIGHBOR = "neighbor"
    UNCONNECTED = "unconnected"


class EdgeRole(str, Enum):
    HIGHLIGHT = "highlight"  # current -> selected target
    CONNECTED = "connected"  # touches the current node
    UNCONNECTED = "unconnected"


class LayoutConfig(BaseModel):
    """Force-directed layout constants."""

    repulsion: float = Field(default=100.0, ge=0)
    spring: float = Field(default=0.03, ge=0)
    centering: float = Field(default=0.05, ge=0)
    damping: float = Field(default=0.95, gt=0, lt=1)
    min_distance: float = Field(default=3.0, ge=0)
    jitter: float = Field(default=0.1, ge=0)
    anchor_height: float | None = 0.0  # None = no anchor pinning


class NodeView(BaseModel):
    id: int
    label: str
    position: tuple[float, float, float]
    role: NodeRole


class EdgeView(BaseModel):
    source: int
    target: int
    role: EdgeRole


class CameraPoseView(BaseModel):
    position: tuple[float, float, float]
    look_at: tuple[float, float, float]


class NavigationStateView(BaseModel):
    current_node: int
    selected_index: int = -1
    target_node: int | None = None
    history: list[int]


class SceneFrame(BaseModel):
    """Everything a renderer needs to draw one frame."""

    nodes: list[NodeView]
    edges: list[EdgeView]
    camera: CameraPoseView
    navigation: NavigationStateView
    transitioning: bool = False
    layout_paused: bool = False
