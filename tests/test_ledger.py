"""Tests for the snapshot ledger reader."""

import json

import pytest

from workflow_graph.ledger import LedgerReadError, SnapshotLedgerReader

SNAPSHOT = {
    "stateIndex": [3],
    "transitionIndex": 2,
    "states": {"1": ["Draft"], "2": ["Done"]},
    "transitions": {"1": ["go", 1, 2, True]},
}


@pytest.mark.asyncio
async def test_reads_counters_and_indexed_records():
    reader = SnapshotLedgerReader(SNAPSHOT)

    assert await reader.read_field("stateIndex") == (3,)
    assert await reader.read_field("transitionIndex") == (2,)
    assert await reader.read_field("states", 2) == ("Done",)
    assert await reader.read_field("transitions", 1) == ("go", 1, 2, True)


@pytest.mark.asyncio
async def test_missing_records_raise_read_error():
    reader = SnapshotLedgerReader(SNAPSHOT)

    with pytest.raises(LedgerReadError):
        await reader.read_field("states", 9)
    with pytest.raises(LedgerReadError):
        await reader.read_field("owner")
    with pytest.raises(LedgerReadError):
        await reader.read_field("stateIndex", 1)


def test_from_path(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")

    assert isinstance(SnapshotLedgerReader.from_path(path), SnapshotLedgerReader)

    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        SnapshotLedgerReader.from_path(path)
