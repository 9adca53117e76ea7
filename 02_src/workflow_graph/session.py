"""One diagram session: a single projection plus the renderer's callbacks."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import ProjectionSettings
from .graph_model import NodeRole
from .graph_orchestrator import GraphOrchestrator
from .ledger import LedgerReader
from .phases import (
    GraphClassifier,
    GraphValidationPhase,
    ReadySignalPhase,
    WorkflowProjector,
    classify_roles,
)
from .phases.ready import ReadyCallback
from .pipeline import PipelinePhase, PipelineRunner

logger = logging.getLogger(__name__)


def build_default_phases(settings: Optional[ProjectionSettings] = None) -> List[PipelinePhase]:
    return [
        WorkflowProjector(settings),
        GraphClassifier(),
        GraphValidationPhase(),
        ReadySignalPhase(),
    ]


class DiagramSession:
    """Holds the graph for one session load.

    The graph is built once by :meth:`load`; afterwards only node roles and
    positions change, plus edges the user draws by hand. Loading again starts
    from an empty graph.
    """

    def __init__(
        self,
        reader: LedgerReader,
        settings: Optional[ProjectionSettings] = None,
        on_ready: Optional[Iterable[ReadyCallback]] = None,
    ) -> None:
        self.reader = reader
        self.settings = settings or ProjectionSettings()
        self.orchestrator = GraphOrchestrator()
        self.context: Dict[str, Any] = {}
        self.ready = False
        self._on_ready: List[ReadyCallback] = list(on_ready or [])

    async def load(self) -> Dict[str, Any]:
        self.orchestrator = GraphOrchestrator()
        self.ready = False
        self.context = {}
        runner = PipelineRunner(phases=build_default_phases(self.settings))
        self.context = await runner.run(
            {
                "reader": self.reader,
                "orchestrator": self.orchestrator,
                "on_ready": self._on_ready,
            }
        )
        self.ready = bool(self.context.get("ready"))
        return self.context

    async def handle_init(self) -> Dict[str, Any]:
        """Renderer finished mounting: project the workflow unless already done."""
        if self.ready:
            return self.context
        return await self.load()

    def handle_node_drag_stop(self, node_id: str, x: float, y: float) -> None:
        self.orchestrator.move_node(node_id, x, y)
        logger.debug("Node %s moved to (%s, %s)", node_id, x, y)

    def handle_connect(self, source: str, target: str, label: str = "") -> str:
        edge_id = self.orchestrator.add_edge(
            edge_id=self.orchestrator.next_edge_id(),
            source_id=str(source),
            target_id=str(target),
            label=label,
            validate=self.settings.strict,
        )
        # Only the source gains an outgoing edge; other roles, manual overrides included, stay.
        state = self.orchestrator.state
        roles = classify_roles(state.nodes.values(), state.edges.values())
        if str(source) in roles:
            self.orchestrator.set_role(str(source), roles[str(source)])
        logger.info("Connected %s -> %s as edge %s", source, target, edge_id)
        return edge_id

    def set_node_role(self, node_id: str, role: NodeRole) -> None:
        self.orchestrator.set_role(node_id, role)

    def snapshot(self) -> Dict[str, Any]:
        """Current layout as the renderer would serialize it."""
        return self.orchestrator.to_render_payload()
