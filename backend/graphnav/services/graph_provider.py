"""Graph Provider: hardcoded, random or fetched topology, with a single-node fallback."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

import httpx
from pydantic import ValidationError

from graphnav.models.graph_models import GraphPayload
from graphnav.services.graph_model import Graph
from graphnav.services.scene_config import (
    CONNECTION_PROBABILITY,
    DEFAULT_GRAPH,
    DEFAULT_LABEL,
    NODE_COUNT,
)

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 10.0


def fallback_payload() -> GraphPayload:
    return GraphPayload(nodes=[DEFAULT_LABEL], connections=[])


def default_payload() -> GraphPayload:
    return GraphPayload.model_validate(DEFAULT_GRAPH)


def fetch_graph(url: str, client: httpx.Client | None = None) -> GraphPayload:
    """GET a graph payload from ``url``.

    Any transport, status, JSON or shape error degrades to the single-node
    fallback graph. There is no retry.
    """
    try:
        if client is not None:
            resp = client.get(url, timeout=_FETCH_TIMEOUT)
        else:
            resp = httpx.get(url, timeout=_FETCH_TIMEOUT)
        resp.raise_for_status()
        payload = GraphPayload.model_validate(resp.json())
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Graph fetch from %s failed, using fallback: %s", url, e)
        return fallback_payload()
    except (ValueError, ValidationError) as e:
        logger.warning("Graph payload from %s is invalid, using fallback: %s", url, e)
        return fallback_payload()

    logger.info("Fetched graph from %s: %d nodes, %d connections", url, len(payload.nodes), len(payload.connections))
    return payload


def _seed_from_env() -> int | None:
    raw = os.environ.get("GRAPHNAV_GRAPH_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer GRAPHNAV_GRAPH_SEED=%r", raw)
        return None


def graph_source_from_env() -> str:
    return os.environ.get("GRAPHNAV_GRAPH_SOURCE", "default").strip() or "default"


def load_graph(source: str | None = None, seed: int | None = None) -> Graph:
    """Build the graph for ``source``.

    ``source`` is ``"default"`` (hardcoded graph), ``"random"`` (seeded random
    connections) or an http(s) URL serving a graph payload. Unknown sources
    fall back to the single-node graph.
    """
    source = source or graph_source_from_env()
    if seed is None:
        seed = _seed_from_env()

    if source == "random":
        return Graph.random(NODE_COUNT, CONNECTION_PROBABILITY, seed=seed)
    if source == "default":
        payload = default_payload()
    elif source.startswith(("http://", "https://")):
        payload = fetch_graph(source)
    else:
        logger.warning("Unknown graph source %r, using fallback", source)
        payload = fallback_payload()
    return Graph.from_payload(payload, seed=seed)


def load_graph_payload(source: str | None = None, seed: int | None = None) -> GraphPayload:
    """Payload form of ``load_graph``, as served to remote viewers.

    Random graphs may repeat labels; a client rebuilding one from this
    payload connects each pair to the first node with that label.
    """
    return load_graph(source, seed).to_payload()


@lru_cache(maxsize=1)
def get_startup_graph() -> Graph:
    """The graph for the configured source, built on first use and then reused."""
    graph = load_graph()
    logger.info("Startup graph from %s: %d nodes, %d edges", graph_source_from_env(), len(graph), len(graph.edges()))
    return graph
