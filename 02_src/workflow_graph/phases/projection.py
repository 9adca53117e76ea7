"""Ledger-to-graph projection phase powered by LangGraph."""

import logging
from typing import Any, AsyncIterator, Dict, Iterable, List, Tuple

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from ..config import ProjectionSettings
from ..graph_model import Position
from ..graph_orchestrator import GraphOrchestrator
from ..ledger import (
    STATE_COUNT_FIELD,
    STATES_FIELD,
    TRANSITION_COUNT_FIELD,
    TRANSITIONS_FIELD,
    LedgerReader,
)
from ..pipeline import PipelinePhase
from ..records import StateRecord, TransitionRecord

logger = logging.getLogger(__name__)


class ProjectionState(TypedDict, total=False):
    state_count: int
    transition_count: int
    node_ids: List[str]
    edge_ids: List[str]


async def iter_records(
    reader: LedgerReader, field: str, indices: Iterable[int]
) -> AsyncIterator[Tuple[int, Tuple[Any, ...]]]:
    """Yield ``(index, raw)`` pairs, awaiting each read before issuing the next."""
    for index in indices:
        raw = await reader.read_field(field, index)
        logger.debug("%s(%s) -> %r", field, index, raw)
        yield index, raw


def to_count(raw: Any) -> int:
    value = raw[0] if isinstance(raw, (list, tuple)) else raw
    return int(value)


class WorkflowProjector(PipelinePhase):
    """Reads the workflow record store and appends nodes and edges in fetch order.

    Both counters are read concurrently. States are then fetched one index at
    a time, followed by transitions. A failed read propagates as-is: whatever
    was appended before it stays in the graph.
    """

    phase_name = "projection"

    def __init__(self, settings: ProjectionSettings | None = None) -> None:
        self._settings = settings or ProjectionSettings()

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        reader: LedgerReader = context["reader"]

        workflow = self._build_workflow(reader, orchestrator)
        result_state = await workflow.ainvoke({"node_ids": [], "edge_ids": []})

        projection_output = {
            "state_count": result_state.get("state_count", 0),
            "transition_count": result_state.get("transition_count", 0),
            "node_ids": list(result_state.get("node_ids", [])),
            "edge_ids": list(result_state.get("edge_ids", [])),
            "index_bound": self._settings.index_bound.value,
        }
        logger.info(
            "Projected %s node(s) and %s edge(s)",
            len(projection_output["node_ids"]),
            len(projection_output["edge_ids"]),
        )
        return {"projection_output": projection_output}

    def _build_workflow(self, reader: LedgerReader, orchestrator: GraphOrchestrator):
        settings = self._settings

        async def read_state_count(state: ProjectionState) -> Dict[str, Any]:
            count = to_count(await reader.read_field(STATE_COUNT_FIELD))
            logger.info("%s = %s", STATE_COUNT_FIELD, count)
            return {"state_count": count}

        async def read_transition_count(state: ProjectionState) -> Dict[str, Any]:
            count = to_count(await reader.read_field(TRANSITION_COUNT_FIELD))
            logger.info("%s = %s", TRANSITION_COUNT_FIELD, count)
            return {"transition_count": count}

        async def fetch_states(state: ProjectionState) -> Dict[str, Any]:
            node_ids: List[str] = []
            indices = settings.index_bound.indices(state.get("state_count", 0))
            async for index, raw in iter_records(reader, STATES_FIELD, indices):
                record = StateRecord.from_raw(index, raw, strict=settings.strict)
                position = Position(
                    x=settings.x_offset,
                    y=settings.y_start + len(node_ids) * settings.y_step,
                )
                node_ids.append(orchestrator.add_state(record, position))
            return {"node_ids": node_ids}

        async def fetch_transitions(state: ProjectionState) -> Dict[str, Any]:
            edge_ids: List[str] = []
            indices = settings.index_bound.indices(state.get("transition_count", 0))
            async for index, raw in iter_records(reader, TRANSITIONS_FIELD, indices):
                record = TransitionRecord.from_raw(index, raw, strict=settings.strict)
                edge_ids.append(orchestrator.add_transition(record, validate=settings.strict))
            return {"edge_ids": edge_ids}

        graph = StateGraph(ProjectionState)
        graph.add_node("read_state_count", read_state_count)
        graph.add_node("read_transition_count", read_transition_count)
        graph.add_node("fetch_states", fetch_states)
        graph.add_node("fetch_transitions", fetch_transitions)
        graph.add_edge(START, "read_state_count")
        graph.add_edge(START, "read_transition_count")
        graph.add_edge(["read_state_count", "read_transition_count"], "fetch_states")
        graph.add_edge("fetch_states", "fetch_transitions")
        graph.add_edge("fetch_transitions", END)
        return graph.compile()

