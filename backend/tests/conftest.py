import os

import pytest

# Disable rate limiting for tests
os.environ["GRAPHNAV_NO_RATE_LIMIT"] = "true"

from graphnav.services.graph_model import Graph  # noqa: E402
from graphnav.services.graph_provider import get_startup_graph  # noqa: E402


class FakeClock:
    """Manually advanced clock for camera and session tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def abc_graph() -> Graph:
    """A - B - C chain."""
    return Graph.from_labels(["A", "B", "C"], [["A", "B"], ["B", "C"]], seed=1)


@pytest.fixture(autouse=True)
def fresh_startup_graph():
    """Each test resolves the configured graph from its own environment."""
    get_startup_graph.cache_clear()
    yield
    get_startup_graph.cache_clear()
