"""Camera transition controller: target pose selection and eased interpolation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import numpy as np

from graphnav.models.scene_models import CameraPoseView, TransitionKind
from graphnav.services.graph_model import Graph
from graphnav.services.scene.navigation import TransitionRequest
from graphnav.services.scene_config import (
    CAMERA_HEIGHT,
    LOOK_AT_CURRENT_BIAS,
    NODE_TRANSITION_DURATION,
    ORBIT_DISTANCE_FACTOR,
    ROTATION_TRANSITION_DURATION,
)

logger = logging.getLogger(__name__)

DURATIONS: dict[TransitionKind, float] = {
    TransitionKind.MOVE: NODE_TRANSITION_DURATION,
    TransitionKind.ROTATE: ROTATION_TRANSITION_DURATION,
}


def ease_in_out(t: float) -> float:
    """Symmetric quadratic ease: 2t² up to the midpoint, mirrored after it."""
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 2 * t * t
    return 1 - 2 * (1 - t) ** 2


@dataclass
class CameraPose:
    position: np.ndarray
    look_at: np.ndarray

    def copy(self) -> CameraPose:
        return CameraPose(self.position.copy(), self.look_at.copy())

    def view(self) -> CameraPoseView:
        return CameraPoseView(
            position=tuple(float(v) for v in self.position),
            look_at=tuple(float(v) for v in self.look_at),
        )


def orbit_position(
    current: np.ndarray,
    target: np.ndarray,
    height: float = CAMERA_HEIGHT,
    radius: float = CAMERA_HEIGHT,
) -> np.ndarray:
    """Behind and above ``current``, on the side away from ``target``.

    The orbit radius grows with the distance between the two nodes so that
    far neighbors stay in frame.
    """
    direction = target - current
    distance = float(np.linalg.norm(direction))
    if distance > 0:
        direction = direction / distance
    dynamic_radius = max(radius, distance * ORBIT_DISTANCE_FACTOR)
    return current - direction * dynamic_radius + np.array([0.0, height, 0.0])


def look_at_point(current: np.ndarray, target: np.ndarray) -> np.ndarray:
    """Midpoint of the two nodes, pulled toward ``current``."""
    midpoint = (current + target) / 2
    return midpoint + (current - midpoint) * LOOK_AT_CURRENT_BIAS


def overhead_position(current: np.ndarray, height: float = CAMERA_HEIGHT) -> np.ndarray:
    return current + np.array([0.0, height, -height])


class CameraController:
    """Owns the camera pose. At most one transition runs at a time.

    A new request replaces the running one, starting from wherever the
    camera is at that moment.
    """

    def __init__(self, graph: Graph, clock: Callable[[], float] = time.monotonic):
        self._graph = graph
        self._clock = clock
        self.pose = CameraPose(
            position=np.array([0.0, 0.0, CAMERA_HEIGHT + 5]),
            look_at=np.zeros(3),
        )
        self._start: CameraPose | None = None
        self._target: CameraPose | None = None
        self._start_time = 0.0
        self._duration = 0.0
        self._kind: TransitionKind | None = None
        self._node_id: int | None = None
        self._target_node: int | None = None

    @property
    def transitioning(self) -> bool:
        return self._target is not None

    @property
    def kind(self) -> TransitionKind | None:
        return self._kind if self.transitioning else None

    @property
    def target_pose(self) -> CameraPose | None:
        return self._target.copy() if self._target is not None else None

    def pose_for(self, node_id: int, target_node: int | None = None) -> CameraPose:
        """Resting pose for the camera anchored on ``node_id``."""
        current = self._graph.position(node_id)
        if target_node is not None:
            target = self._graph.position(target_node)
            return CameraPose(
                position=orbit_position(current, target),
                look_at=look_at_point(current, target),
            )
        return CameraPose(position=overhead_position(current), look_at=current)

    def place(self, node_id: int, target_node: int | None = None) -> None:
        """Jump straight to the resting pose, cancelling any transition."""
        self._node_id = node_id
        self._target_node = target_node
        self._target = None
        self._kind = None
        self.pose = self.pose_for(node_id, target_node)

    def start_transition(
        self,
        node_id: int | None,
        kind: TransitionKind,
        target_node: int | None = None,
        now: float | None = None,
    ) -> bool:
        """Begin easing toward the pose for ``node_id``. A missing node is ignored."""
        if node_id is None:
            logger.debug("Ignoring camera transition without a node")
            return False
        if self.transitioning:
            logger.debug("Superseding %s transition", self._kind.value)
        self._node_id = node_id
        self._target_node = target_node
        self._kind = kind
        self._duration = DURATIONS[kind]
        self._start_time = self._clock() if now is None else now
        self._start = self.pose.copy()
        self._target = self.pose_for(node_id, target_node)
        return True

    def request(self, request: TransitionRequest | None, now: float | None = None) -> bool:
        if request is None:
            return False
        return self.start_transition(request.node_id, request.kind, request.target_node, now=now)

    def progress(self, now: float | None = None) -> float:
        if not self.transitioning:
            return 1.0
        now = self._clock() if now is None else now
        if self._duration <= 0:
            return 1.0
        return min(max((now - self._start_time) / self._duration, 0.0), 1.0)

    def update(self, now: float | None = None) -> CameraPose:
        """Advance the running transition, or keep aiming at the anchor while idle."""
        if not self.transitioning:
            if self._node_id is not None:
                self.pose.look_at = self.pose_for(self._node_id, self._target_node).look_at
            return self.pose

        t = self.progress(now)
        if t >= 1.0:
            self.pose = self._target.copy()
            logger.debug("Camera %s transition finished at node %d", self._kind.value, self._node_id)
            self._target = None
            self._start = None
            self._kind = None
            return self.pose

        eased = ease_in_out(t)
        self.pose = CameraPose(
            position=self._start.position + (self._target.position - self._start.position) * eased,
            look_at=self._start.look_at + (self._target.look_at - self._start.look_at) * eased,
        )
        return self.pose
