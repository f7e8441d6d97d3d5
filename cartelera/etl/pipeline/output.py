"""Latest rankings JSON writer."""

import json
import logging
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from cartelera.etl.pipeline.orchestrator import PipelineResult

logger = logging.getLogger(__name__)


def build_payload(result: PipelineResult, updated_at: date | None = None) -> dict[str, Any]:
    """JSON-ready payload of a run.

    Args:
        result: Pipeline result.
        updated_at: Date stamped on the payload, today (UTC) by default.

    Returns:
        Dict with updated_at, movies and series.
    """
    stamp = updated_at or datetime.now(UTC).date()
    return {
        "updated_at": stamp.isoformat(),
        "movies": [entry.to_output() for entry in result.movies],
        "series": [entry.to_output() for entry in result.series],
    }


def write_latest(result: PipelineResult, path: Path, updated_at: date | None = None) -> Path:
    """Write the run payload, replacing any previous file.

    Args:
        result: Pipeline result.
        path: Destination JSON file.
        updated_at: Date stamped on the payload.

    Returns:
        Written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_payload(result, updated_at)

    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info(f"💾 Wrote {path} ({len(payload['movies'])} movies, {len(payload['series'])} series)")
    return path
