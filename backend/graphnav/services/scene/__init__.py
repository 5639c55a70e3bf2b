"""Headless scene: force layout, navigation state machine and camera transitions."""

from graphnav.services.scene.camera import CameraController, CameraPose, ease_in_out
from graphnav.services.scene.layout import ForceLayout
from graphnav.services.scene.navigation import (
    NavigationState,
    Navigator,
    TransitionRequest,
    apply_command,
)
from graphnav.services.scene.session import GraphSession

__all__ = [
    "CameraController",
    "CameraPose",
    "ForceLayout",
    "GraphSession",
    "NavigationState",
    "Navigator",
    "TransitionRequest",
    "apply_command",
    "ease_in_out",
]
