"""Single writer for the diagram graph state."""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Set

from .graph_model import GraphEdge, GraphNode, GraphState, NodeRole, Position
from .records import StateRecord, TransitionRecord

logger = logging.getLogger(__name__)


class DanglingEdgeError(ValueError):
    """Raised when a validated edge points at a node that is not in the graph."""


class GraphOrchestrator:
    """Owns append-only insertion and the few mutable node fields."""

    def __init__(self) -> None:
        self.state = GraphState()

    def add_state(self, record: StateRecord, position: Position) -> str:
        if record.id in self.state.nodes:
            raise ValueError(f"Duplicate node id: {record.id}")
        self.state.nodes[record.id] = GraphNode(
            id=record.id,
            label=record.label,
            position=Position(position.x, position.y),
        )
        return record.id

    def add_transition(self, record: TransitionRecord, validate: bool = False) -> str:
        return self.add_edge(
            edge_id=record.id,
            source_id=record.source_id,
            target_id=record.target_id,
            label=record.label,
            animated=record.animated,
            validate=validate,
        )

    def add_edge(
        self,
        edge_id: str,
        source_id: str,
        target_id: str,
        label: str = "",
        animated: bool = False,
        validate: bool = False,
    ) -> str:
        if edge_id in self.state.edges:
            raise ValueError(f"Duplicate edge id: {edge_id}")
        if validate:
            if source_id not in self.state.nodes:
                raise DanglingEdgeError(f"Unknown source node: {source_id}")
            if target_id not in self.state.nodes:
                raise DanglingEdgeError(f"Unknown target node: {target_id}")

        self.state.edges[edge_id] = GraphEdge(
            id=edge_id,
            label=label,
            source=source_id,
            target=target_id,
            animated=animated,
        )
        return edge_id

    def set_role(self, node_id: str, role: NodeRole) -> None:
        self._get_node(node_id).role = NodeRole(role)

    def move_node(self, node_id: str, x: float, y: float) -> None:
        self._get_node(node_id).position = Position(x, y)

    def outgoing_sources(self) -> Set[str]:
        return {edge.source for edge in self.state.edges.values()}

    def dangling_edges(self) -> List[Dict[str, str]]:
        dangling: List[Dict[str, str]] = []
        for edge in self.state.edges.values():
            missing = [
                end
                for end, node_id in (("source", edge.source), ("target", edge.target))
                if node_id not in self.state.nodes
            ]
            if missing:
                dangling.append(
                    {
                        "edge_id": edge.id,
                        "source": edge.source,
                        "target": edge.target,
                        "missing": ",".join(missing),
                    }
                )
        return dangling

    def next_edge_id(self) -> str:
        numeric = [int(edge_id) for edge_id in self.state.edges if edge_id.isdigit()]
        return str(max(numeric, default=0) + 1)

    def to_json(self) -> Dict[str, Any]:
        return {
            "nodes": [_node_dict(node) for node in self.state.nodes.values()],
            "edges": [asdict(edge) for edge in self.state.edges.values()],
        }

    def to_render_payload(self) -> Dict[str, Any]:
        """Shape nodes and edges the way the diagram renderer consumes them."""
        nodes = [
            {
                "id": node.id,
                "type": node.role.value,
                "data": {"label": node.label},
                "position": {"x": node.position.x, "y": node.position.y},
            }
            for node in self.state.nodes.values()
        ]
        edges = [
            {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
                "label": edge.label,
                "animated": edge.animated,
                "markerEnd": {"type": edge.marker_end},
            }
            for edge in self.state.edges.values()
        ]
        return {"nodes": nodes, "edges": edges}

    def _get_node(self, node_id: str) -> GraphNode:
        node = self.state.nodes.get(str(node_id))
        if node is None:
            raise KeyError(f"Unknown node: {node_id}")
        return node


def _node_dict(node: GraphNode) -> Dict[str, Any]:
    payload = asdict(node)
    payload["role"] = node.role.value
    return payload
