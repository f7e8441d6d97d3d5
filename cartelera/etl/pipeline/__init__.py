"""Ratings pipeline package.

Discovers recent movies and series, enriches them with ratings from
several sources and ranks them.

Public API:
    - run_pipeline: Execute a complete run
    - write_latest: Write the latest rankings JSON
    - main: CLI entry point
"""

from cartelera.etl.pipeline.cli import main
from cartelera.etl.pipeline.orchestrator import (
    PipelineOptions,
    PipelineResult,
    PipelineStats,
    run_media_type,
    run_pipeline,
)
from cartelera.etl.pipeline.output import build_payload, write_latest

__all__ = [
    "run_pipeline",
    "run_media_type",
    "PipelineOptions",
    "PipelineResult",
    "PipelineStats",
    "build_payload",
    "write_latest",
    "main",
]
