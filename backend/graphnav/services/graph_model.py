"""Graph Model: nodes, undirected adjacency and per-node state arrays.

Nodes live in an arena: each node gets a stable integer id equal to its
index, and positions/velocities are rows of ``numpy`` arrays indexed by that
id. Adjacency lists keep insertion order, which is the cyclic order used for
left/right neighbor selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from graphnav.models.graph_models import GraphPayload
from graphnav.services.scene_config import (
    CONNECTION_PROBABILITY,
    DEFAULT_LABEL,
    NODE_COUNT,
    NODE_SPREAD_RADIUS,
    RANDOM_LABELS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    id: int
    label: str


def sphere_positions(count: int, radius: float, rng: np.random.Generator) -> np.ndarray:
    """Uniform random points on a sphere surface, shape (count, 3)."""
    theta = rng.random(count) * 2 * np.pi
    phi = np.arccos(2 * rng.random(count) - 1)
    return np.column_stack(
        (
            radius * np.sin(phi) * np.cos(theta),
            radius * np.sin(phi) * np.sin(theta),
            radius * np.cos(phi),
        )
    )


class Graph:
    """Undirected graph with symmetric adjacency, no self loops, no duplicate edges."""

    def __init__(
        self,
        labels: Sequence[str],
        rng: np.random.Generator | None = None,
        spread_radius: float = NODE_SPREAD_RADIUS,
    ):
        if not labels:
            raise ValueError("a graph needs at least one node")
        self._rng = rng if rng is not None else np.random.default_rng()
        self._nodes = [Node(id=i, label=label) for i, label in enumerate(labels)]
        self._adjacency: dict[int, list[int]] = {node.id: [] for node in self._nodes}
        self._edges: list[tuple[int, int]] = []
        self._edge_keys: set[frozenset[int]] = set()
        self.positions = sphere_positions(len(self._nodes), spread_radius, self._rng)
        self.velocities = np.zeros_like(self.positions)

    # --- construction ---

    @classmethod
    def from_labels(
        cls,
        labels: Sequence[str],
        connections: Iterable[Sequence[str]] = (),
        seed: int | None = None,
    ) -> Graph:
        """Build from node labels and label pairs.

        A label in a connection resolves to the first node carrying it.
        Pairs naming unknown labels are skipped.
        """
        graph = cls(labels, rng=np.random.default_rng(seed))
        first_by_label: dict[str, int] = {}
        for node in graph._nodes:
            first_by_label.setdefault(node.label, node.id)

        for pair in connections:
            a_label, b_label = pair[0], pair[1]
            a = first_by_label.get(a_label)
            b = first_by_label.get(b_label)
            if a is None or b is None:
                logger.warning("Skipping connection with unknown label: %s - %s", a_label, b_label)
                continue
            graph.add_edge(a, b)
        return graph

    @classmethod
    def from_payload(cls, payload: GraphPayload, seed: int | None = None) -> Graph:
        return cls.from_labels(payload.nodes, payload.connections, seed=seed)

    @classmethod
    def random(
        cls,
        count: int = NODE_COUNT,
        probability: float = CONNECTION_PROBABILITY,
        seed: int | None = None,
    ) -> Graph:
        """Random graph: one seeded uniform draw per unordered pair, edge iff draw < probability."""
        rng = np.random.default_rng(seed)
        labels = [RANDOM_LABELS[i] for i in rng.integers(0, len(RANDOM_LABELS), size=count)]
        graph = cls(labels, rng=rng)
        for i in range(count):
            for j in range(i + 1, count):
                if rng.random() < probability:
                    graph.add_edge(i, j)
        logger.debug("Generated random graph: %d nodes, %d edges", count, len(graph._edges))
        return graph

    @classmethod
    def single(cls, label: str = DEFAULT_LABEL) -> Graph:
        """Fallback graph: one isolated node."""
        return cls([label])

    def add_edge(self, a: int, b: int) -> bool:
        """Connect a and b. Returns False for self loops and existing edges."""
        if a == b:
            logger.debug("Ignoring self loop on node %d", a)
            return False
        if a not in self._adjacency or b not in self._adjacency:
            raise KeyError(f"unknown node id in edge ({a}, {b})")
        key = frozenset((a, b))
        if key in self._edge_keys:
            logger.debug("Ignoring duplicate edge %d - %d", a, b)
            return False
        self._edge_keys.add(key)
        self._edges.append((a, b))
        self._adjacency[a].append(b)
        self._adjacency[b].append(a)
        return True

    # --- queries ---

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def node(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def all_nodes(self) -> list[Node]:
        return list(self._nodes)

    def neighbors(self, node_id: int) -> list[int]:
        return list(self._adjacency[node_id])

    def edges(self) -> list[tuple[int, int]]:
        return list(self._edges)

    def has_edge(self, a: int, b: int) -> bool:
        return frozenset((a, b)) in self._edge_keys

    def node_by_label(self, label: str) -> Node | None:
        for node in self._nodes:
            if node.label == label:
                return node
        return None

    def position(self, node_id: int) -> np.ndarray:
        """Copy of a node's current position."""
        return self.positions[node_id].copy()

    def isolated_nodes(self) -> list[int]:
        return [node_id for node_id, nbrs in self._adjacency.items() if not nbrs]

    def to_payload(self) -> GraphPayload:
        return GraphPayload(
            nodes=[node.label for node in self._nodes],
            connections=[[self._nodes[a].label, self._nodes[b].label] for a, b in self._edges],
        )
