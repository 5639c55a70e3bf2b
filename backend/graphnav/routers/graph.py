from fastapi import APIRouter, Depends

from graphnav.models.graph_models import GraphPayload, GraphSummary
from graphnav.services.graph_model import Graph
from graphnav.services.graph_provider import get_startup_graph, graph_source_from_env

router = APIRouter(prefix="/api/graph", tags=["graph"])


@router.get("", response_model=GraphPayload)
async def get_graph(graph: Graph = Depends(get_startup_graph)) -> GraphPayload:
    """Topology for viewers that fetch their graph at startup."""
    return graph.to_payload()


@router.get("/summary", response_model=GraphSummary)
async def get_graph_summary(graph: Graph = Depends(get_startup_graph)) -> GraphSummary:
    """Node/edge counts for the served graph."""
    return GraphSummary(
        node_count=len(graph),
        edge_count=len(graph.edges()),
        isolated_count=len(graph.isolated_nodes()),
        source=graph_source_from_env(),
    )
