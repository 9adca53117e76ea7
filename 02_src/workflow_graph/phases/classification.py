"""Node role classification over the completed graph."""

import logging
from typing import Any, Dict, Iterable, Mapping

from ..graph_model import GraphEdge, GraphNode, NodeRole
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

ENTRY_NODE_ID = "1"


def classify_roles(
    nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]
) -> Dict[str, NodeRole]:
    """Compute roles from scratch: entry node first, then sinks override it."""
    sources = {str(edge.source) for edge in edges}
    roles: Dict[str, NodeRole] = {}
    for node in nodes:
        role = NodeRole.DEFAULT
        if node.id == ENTRY_NODE_ID:
            role = NodeRole.INPUT
        if node.id not in sources:
            role = NodeRole.OUTPUT
        roles[node.id] = role
    return roles


class GraphClassifier(PipelinePhase):
    phase_name = "classification"

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        roles = self.classify(orchestrator)
        return {"classification_output": {node_id: role.value for node_id, role in roles.items()}}

    @staticmethod
    def classify(orchestrator: GraphOrchestrator) -> Mapping[str, NodeRole]:
        state = orchestrator.state
        roles = classify_roles(state.nodes.values(), state.edges.values())
        for node_id, role in roles.items():
            orchestrator.set_role(node_id, role)
        logger.info(
            "Classified %s node(s): %s output",
            len(roles),
            sum(1 for role in roles.values() if role is NodeRole.OUTPUT),
        )
        return roles
