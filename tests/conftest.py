"""Shared test fixtures for workflow_graph."""

from __future__ import annotations

import asyncio

import pytest

from workflow_graph.graph_orchestrator import GraphOrchestrator


class FakeLedgerReader:
    """In-memory record store that records call order and in-flight reads."""

    def __init__(
        self,
        state_count=0,
        transition_count=0,
        states=None,
        transitions=None,
        fail_on=None,
        delay: float = 0.0,
    ):
        self.state_count = state_count
        self.transition_count = transition_count
        self.states = dict(states or {})
        self.transitions = dict(transitions or {})
        self.fail_on = fail_on
        self.delay = delay
        self.calls: list[tuple] = []
        self.in_flight = 0
        self.max_in_flight = {"counts": 0, "states": 0, "transitions": 0}

    async def read_field(self, function_name, *args):
        call = (function_name, *args)
        self.calls.append(call)
        self.in_flight += 1
        try:
            group = "counts" if function_name in ("stateIndex", "transitionIndex") else function_name
            if group in self.max_in_flight:
                self.max_in_flight[group] = max(self.max_in_flight[group], self.in_flight)
            await asyncio.sleep(self.delay)
            if self.fail_on == call:
                raise ConnectionError(f"read failed: {call}")
            if function_name == "stateIndex":
                return (self.state_count,)
            if function_name == "transitionIndex":
                return (self.transition_count,)
            if function_name == "states":
                return self.states.get(args[0], (f"State {args[0]}",))
            if function_name == "transitions":
                return self.transitions[args[0]]
            raise KeyError(function_name)
        finally:
            self.in_flight -= 1


@pytest.fixture(autouse=True)
def clear_projection_env(monkeypatch):
    for name in (
        "WORKFLOW_GRAPH_INDEX_BOUND",
        "WORKFLOW_GRAPH_STRICT",
        "WORKFLOW_GRAPH_X_OFFSET",
        "WORKFLOW_GRAPH_Y_START",
        "WORKFLOW_GRAPH_Y_STEP",
        "WORKFLOW_GRAPH_SNAPSHOT_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def orchestrator():
    return GraphOrchestrator()


@pytest.fixture
def make_reader():
    return FakeLedgerReader
