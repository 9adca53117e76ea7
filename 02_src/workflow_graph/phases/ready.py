"""Signals the rendering side that the graph is complete."""

import logging
from typing import Any, Callable, Dict

from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)

ReadyCallback = Callable[[GraphOrchestrator], None]


class ReadySignalPhase(PipelinePhase):
    phase_name = "ready"

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        callbacks = context.get("on_ready") or []
        for callback in callbacks:
            callback(orchestrator)
        logger.info("Graph ready (%s listener(s) notified)", len(callbacks))
        return {"ready": True}
