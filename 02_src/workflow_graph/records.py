"""Immutable records decoded from raw ledger tuples."""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class MalformedRecordError(ValueError):
    """Raised in strict mode when a raw tuple is shorter than its record needs."""


@dataclass(frozen=True)
class StateRecord:
    id: str
    label: str

    @classmethod
    def from_raw(cls, index: int, raw: Sequence[Any], strict: bool = False) -> "StateRecord":
        values = _pad(raw, 1, "states", index, strict)
        return cls(id=str(index), label=_text(values[0]))


@dataclass(frozen=True)
class TransitionRecord:
    id: str
    label: str
    source_id: str
    target_id: str
    animated: bool

    @classmethod
    def from_raw(
        cls, index: int, raw: Sequence[Any], strict: bool = False
    ) -> "TransitionRecord":
        label, source, target, flag = _pad(raw, 4, "transitions", index, strict)
        return cls(
            id=str(index),
            label=_text(label),
            source_id=_node_id(source),
            target_id=_node_id(target),
            animated=bool(flag),
        )


def _pad(raw: Sequence[Any], width: int, field: str, index: int, strict: bool) -> list:
    values = list(raw) if isinstance(raw, (list, tuple)) else [raw]
    if len(values) >= width:
        return values[:width]
    if strict:
        raise MalformedRecordError(
            f"{field}({index}) returned {len(values)} value(s), expected {width}"
        )
    logger.warning(
        "%s(%s) returned %s value(s), expected %s; padding", field, index, len(values), width
    )
    return values + [None] * (width - len(values))


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _node_id(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return _text(value)
