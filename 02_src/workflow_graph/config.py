"""Projection settings loaded from environment/.env."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import load_dotenv


class IndexBound(str, Enum):
    """Which record indices a fetched count covers.

    ``EXCLUSIVE`` reads ``1 <= i < count`` and never fetches the record at
    ``count``; ``INCLUSIVE`` reads ``1 <= i <= count``.
    """

    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"

    def indices(self, count: int) -> range:
        stop = count + 1 if self is IndexBound.INCLUSIVE else count
        return range(1, max(stop, 1))


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ProjectionSettings:
    index_bound: IndexBound = IndexBound.EXCLUSIVE
    strict: bool = False
    x_offset: float = 250.0
    y_start: float = 150.0
    y_step: float = 100.0
    snapshot_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ProjectionSettings":
        load_dotenv()
        return cls(
            index_bound=IndexBound(os.getenv("WORKFLOW_GRAPH_INDEX_BOUND", "exclusive").lower()),
            strict=_parse_bool("WORKFLOW_GRAPH_STRICT", os.getenv("WORKFLOW_GRAPH_STRICT", "false")),
            x_offset=float(os.getenv("WORKFLOW_GRAPH_X_OFFSET", "250")),
            y_start=float(os.getenv("WORKFLOW_GRAPH_Y_START", "150")),
            y_step=float(os.getenv("WORKFLOW_GRAPH_Y_STEP", "100")),
            snapshot_path=os.getenv("WORKFLOW_GRAPH_SNAPSHOT_PATH") or None,
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
