"""CLI entrypoint: project a workflow snapshot and save the diagram JSON."""

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List

from .config import IndexBound, ProjectionSettings
from .graph_orchestrator import GraphOrchestrator
from .ledger import LedgerReader, SnapshotLedgerReader
from .session import DiagramSession

logger = logging.getLogger(__name__)


async def run_pipeline(
    reader: LedgerReader, settings: ProjectionSettings | None = None
) -> Dict[str, Any]:
    def fit_view(orchestrator: GraphOrchestrator) -> None:
        logger.info("fit view: %s node(s)", len(orchestrator.state.nodes))

    session = DiagramSession(reader, settings=settings, on_ready=[fit_view])
    final_context = await session.load()
    artifact = session.snapshot()
    artifact["meta"] = {
        "projection_report": final_context.get("projection_output", {}),
        "roles": final_context.get("classification_output", {}),
        "validation_report": final_context.get("validation_report", {}),
        "ready": session.ready,
    }
    return artifact


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Project a ledger workflow snapshot into a diagram JSON artifact."
    )
    parser.add_argument(
        "--snapshot-path",
        default=None,
        help=(
            "JSON record store snapshot (defaults to WORKFLOW_GRAPH_SNAPSHOT_PATH), "
            "e.g. 03_data/workflow_graph/sample_store.json."
        ),
    )
    parser.add_argument(
        "--output-path",
        default="03_data/workflow_graph/diagram.json",
        help="Where to save resulting diagram JSON.",
    )
    parser.add_argument(
        "--index-bound",
        choices=[bound.value for bound in IndexBound],
        default=None,
        help="Whether a fetched count includes the record at that index.",
    )
    parser.add_argument("--strict", action="store_true", help="Reject malformed records and dangling edges.")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    settings = ProjectionSettings.from_env()
    if args.index_bound:
        settings = replace(settings, index_bound=IndexBound(args.index_bound))
    if args.strict:
        settings = replace(settings, strict=True)

    snapshot_path = args.snapshot_path or settings.snapshot_path
    if not snapshot_path:
        print("No snapshot given: pass --snapshot-path or set WORKFLOW_GRAPH_SNAPSHOT_PATH.")
        return 2

    try:
        reader = SnapshotLedgerReader.from_path(Path(snapshot_path))
    except (OSError, ValueError) as error:
        print(f"Cannot load snapshot {snapshot_path}: {error}")
        return 2

    try:
        artifact = asyncio.run(run_pipeline(reader, settings))
    except Exception as error:
        logger.exception("Projection failed")
        print(f"Projection failed: {error}")
        return 1

    output_path = Path(args.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(artifact, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Diagram artifact saved to: {output_path.resolve()}")
    print(
        "Counts:",
        f"nodes={len(artifact['nodes'])}",
        f"edges={len(artifact['edges'])}",
        f"dangling={len(artifact['meta']['validation_report'].get('dangling_edges', []))}",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
