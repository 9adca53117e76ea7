"""Projection of ledger-resident workflows into diagram graphs."""

from .config import IndexBound, ProjectionSettings
from .graph_model import GraphEdge, GraphNode, GraphState, NodeRole, Position
from .graph_orchestrator import DanglingEdgeError, GraphOrchestrator
from .ledger import LedgerReadError, LedgerReader, SnapshotLedgerReader
from .pipeline import PipelinePhase, PipelineRunner
from .records import MalformedRecordError, StateRecord, TransitionRecord
from .session import DiagramSession

__all__ = [
    "IndexBound",
    "ProjectionSettings",
    "GraphNode",
    "GraphEdge",
    "GraphState",
    "NodeRole",
    "Position",
    "GraphOrchestrator",
    "DanglingEdgeError",
    "LedgerReader",
    "LedgerReadError",
    "SnapshotLedgerReader",
    "PipelinePhase",
    "PipelineRunner",
    "StateRecord",
    "TransitionRecord",
    "MalformedRecordError",
    "DiagramSession",
]
