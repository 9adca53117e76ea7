"""Validation and QA phase."""

import logging
from collections import Counter
from typing import Any, Dict

from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class GraphValidationPhase(PipelinePhase):
    phase_name = "validation"

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator = context["orchestrator"]
        graph_payload = orchestrator.to_json()
        dangling = orchestrator.dangling_edges()
        warnings = [
            f"edge {item['edge_id']} references missing {item['missing']} node(s)"
            for item in dangling
        ]
        for warning in warnings:
            logger.warning(warning)

        qa_report = {
            "node_count": len(graph_payload["nodes"]),
            "edge_count": len(graph_payload["edges"]),
            "role_counts": dict(Counter(node["role"] for node in graph_payload["nodes"])),
            "dangling_edges": dangling,
            "warnings": warnings,
        }
        return {"validation_report": qa_report}
