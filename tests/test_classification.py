"""Tests for node role classification."""

from types import SimpleNamespace

import pytest

from workflow_graph.graph_model import NodeRole, Position
from workflow_graph.phases.classification import GraphClassifier, classify_roles
from workflow_graph.records import StateRecord, TransitionRecord


def _build(orchestrator, node_ids, transitions):
    for index, node_id in enumerate(node_ids):
        orchestrator.add_state(StateRecord(id=node_id, label=f"S{node_id}"), Position(0, index))
    for index, (source, target) in enumerate(transitions, start=1):
        orchestrator.add_transition(
            TransitionRecord(
                id=str(index), label="", source_id=source, target_id=target, animated=False
            )
        )
    return orchestrator


def _roles(orchestrator):
    return {node.id: node.role for node in orchestrator.state.nodes.values()}


def test_entry_with_outgoing_edge_stays_input(orchestrator):
    _build(orchestrator, ["1", "2"], [("1", "2")])

    GraphClassifier.classify(orchestrator)

    assert _roles(orchestrator) == {"1": NodeRole.INPUT, "2": NodeRole.OUTPUT}


def test_entry_without_outgoing_edge_becomes_output(orchestrator):
    _build(orchestrator, ["1", "2", "3"], [("2", "3")])

    GraphClassifier.classify(orchestrator)

    assert _roles(orchestrator) == {
        "1": NodeRole.OUTPUT,
        "2": NodeRole.DEFAULT,
        "3": NodeRole.OUTPUT,
    }


def test_interior_nodes_keep_default_role(orchestrator):
    _build(orchestrator, ["1", "2", "3", "4"], [("1", "2"), ("2", "3"), ("3", "1"), ("2", "4")])

    GraphClassifier.classify(orchestrator)

    assert _roles(orchestrator) == {
        "1": NodeRole.INPUT,
        "2": NodeRole.DEFAULT,
        "3": NodeRole.DEFAULT,
        "4": NodeRole.OUTPUT,
    }


def test_classification_is_idempotent(orchestrator):
    _build(orchestrator, ["1", "2", "3"], [("1", "2"), ("1", "3")])

    first = dict(GraphClassifier.classify(orchestrator))
    second = dict(GraphClassifier.classify(orchestrator))

    assert first == second == _roles(orchestrator)


def test_ids_are_compared_as_strings():
    roles = classify_roles([], [])
    assert roles == {}

    nodes = [SimpleNamespace(id="01"), SimpleNamespace(id="1")]
    edges = [SimpleNamespace(source=1)]

    roles = classify_roles(nodes, edges)

    assert roles == {"01": NodeRole.OUTPUT, "1": NodeRole.INPUT}


def test_no_entry_node_is_a_noop_for_input(orchestrator):
    _build(orchestrator, ["2", "3"], [("2", "3")])

    GraphClassifier.classify(orchestrator)

    assert NodeRole.INPUT not in _roles(orchestrator).values()


@pytest.mark.asyncio
async def test_phase_reports_roles_and_handles_empty_graph(orchestrator):
    result = await GraphClassifier().run({"orchestrator": orchestrator})
    assert result == {"classification_output": {}}

    _build(orchestrator, ["1", "2"], [("1", "2")])
    result = await GraphClassifier().run({"orchestrator": orchestrator})

    assert result["classification_output"] == {"1": "input", "2": "output"}
