"""Ledger read capability used by the projector.

The projector only needs one thing from a ledger client: read a named field of
the workflow contract, optionally by index, and get back a tuple of raw values.
Any client exposing ``read_field`` satisfies :class:`LedgerReader`.
``SnapshotLedgerReader`` serves the same record store from a JSON document,
which is what the CLI and the tests run against.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Protocol, Tuple

logger = logging.getLogger(__name__)

STATE_COUNT_FIELD = "stateIndex"
TRANSITION_COUNT_FIELD = "transitionIndex"
STATES_FIELD = "states"
TRANSITIONS_FIELD = "transitions"


class LedgerReadError(RuntimeError):
    """A remote read failed or reverted."""


class LedgerReader(Protocol):
    async def read_field(self, function_name: str, *args: Any) -> Tuple[Any, ...]:
        ...


class SnapshotLedgerReader:
    """Record store backed by an in-memory snapshot of the contract fields.

    Counter fields map to a value or a one-element list; indexed fields map
    index (as a string key) to the raw tuple returned for it.
    """

    def __init__(self, snapshot: Dict[str, Any]) -> None:
        self._snapshot = dict(snapshot)

    @classmethod
    def from_path(cls, path: Path) -> "SnapshotLedgerReader":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Snapshot must be a JSON object: {path}")
        return cls(payload)

    async def read_field(self, function_name: str, *args: Any) -> Tuple[Any, ...]:
        if function_name not in self._snapshot:
            raise LedgerReadError(f"Unknown field: {function_name}")
        value = self._snapshot[function_name]

        if not args:
            logger.debug("read %s()", function_name)
            return _as_tuple(value)

        index = str(args[0])
        if not isinstance(value, dict) or index not in value:
            raise LedgerReadError(f"{function_name}({index}) reverted: no such record")
        logger.debug("read %s(%s)", function_name, index)
        return _as_tuple(value[index])


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)
