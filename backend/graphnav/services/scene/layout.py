"""Force-directed layout: pairwise repulsion, edge springs, pull toward the y axis."""

from __future__ import annotations

import logging

import numpy as np

from graphnav.models.scene_models import LayoutConfig
from graphnav.services.graph_model import Graph

logger = logging.getLogger(__name__)


def _normalize(vectors: np.ndarray) -> np.ndarray:
    """Unit vectors along the last axis; zero-length rows stay zero."""
    norms = np.linalg.norm(vectors, axis=-1, keepdims=True)
    norms = np.where(norms == 0, 1, norms)
    return vectors / norms


class ForceLayout:
    """Advances the graph's positions/velocities one timestep at a time.

    Only touches ``graph.positions`` and ``graph.velocities``. The anchor
    node, if any, has its height pinned to ``config.anchor_height`` after
    every step.
    """

    def __init__(
        self,
        graph: Graph,
        config: LayoutConfig | None = None,
        anchor: int | None = 0,
        rng: np.random.Generator | None = None,
    ):
        self._graph = graph
        self._config = config or LayoutConfig()
        self._rng = rng if rng is not None else graph.rng
        if anchor is not None and not 0 <= anchor < len(graph):
            raise ValueError(f"anchor node {anchor} is not in the graph")
        self._anchor = anchor if self._config.anchor_height is not None else None
        self.paused = False
        self.ticks = 0

        edges = graph.edges()
        self._edge_a = np.array([a for a, _ in edges], dtype=int)
        self._edge_b = np.array([b for _, b in edges], dtype=int)

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def forces(self) -> np.ndarray:
        """Net force on every node for the current positions, shape (n, 3)."""
        cfg = self._config
        pos = self._graph.positions

        # Repulsion: separation[i, j] points from j to i
        separation = pos[:, None, :] - pos[None, :, :]
        dist = np.linalg.norm(separation, axis=-1)
        close = dist < cfg.min_distance
        np.fill_diagonal(close, False)
        if close.any():
            iu, ju = np.nonzero(np.triu(close))
            jitter = (self._rng.random((len(iu), 3)) - 0.5) * cfg.jitter
            separation[iu, ju] += jitter
            separation[ju, iu] -= jitter
        magnitude = cfg.repulsion / (dist**2 + 1)
        np.fill_diagonal(magnitude, 0.0)
        total = (magnitude[..., None] * _normalize(separation)).sum(axis=1)

        # Springs: |F| = dist * k, along the edge
        if len(self._edge_a):
            delta = pos[self._edge_b] - pos[self._edge_a]
            length = np.linalg.norm(delta, axis=-1, keepdims=True)
            pull = _normalize(delta) * length * cfg.spring
            np.add.at(total, self._edge_a, pull)
            np.add.at(total, self._edge_b, -pull)

        # Centering toward the vertical axis at the node's own height
        horizontal = pos.copy()
        horizontal[:, 1] = 0.0
        total -= cfg.centering * horizontal
        return total

    def step(self, dt: float) -> None:
        if self.paused:
            return
        cfg = self._config
        graph = self._graph

        graph.velocities += self.forces() * dt
        graph.velocities *= cfg.damping
        graph.positions += graph.velocities * dt

        if self._anchor is not None:
            graph.positions[self._anchor, 1] = cfg.anchor_height
            graph.velocities[self._anchor, 1] = 0.0
        self.ticks += 1

    def run(self, ticks: int, dt: float) -> None:
        for _ in range(ticks):
            self.step(dt)
        logger.debug(
            "Layout ran %d ticks, max speed %.4f, kinetic energy %.4f",
            ticks,
            self.max_speed(),
            self.kinetic_energy(),
        )

    def max_speed(self) -> float:
        """Largest velocity magnitude across all nodes."""
        return float(np.linalg.norm(self._graph.velocities, axis=-1).max())

    def kinetic_energy(self) -> float:
        return float(0.5 * (self._graph.velocities**2).sum())
