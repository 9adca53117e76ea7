"""Diagram graph primitives: nodes, edges and their roles."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class NodeRole(str, Enum):
    DEFAULT = "default"
    INPUT = "input"
    OUTPUT = "output"


@dataclass
class Position:
    x: float
    y: float


@dataclass
class GraphNode:
    id: str
    label: str
    position: Position
    role: NodeRole = NodeRole.DEFAULT


@dataclass
class GraphEdge:
    id: str
    label: str
    source: str
    target: str
    animated: bool = False
    marker_end: str = "arrowclosed"


@dataclass
class GraphState:
    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Dict[str, GraphEdge] = field(default_factory=dict)
