"""Pipeline phases for ledger workflow projection."""

from .classification import GraphClassifier, classify_roles
from .projection import WorkflowProjector
from .ready import ReadySignalPhase
from .validation import GraphValidationPhase

__all__ = [
    "WorkflowProjector",
    "GraphClassifier",
    "classify_roles",
    "GraphValidationPhase",
    "ReadySignalPhase",
]
