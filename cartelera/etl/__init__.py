"""Ratings ETL: catalog discovery, rating enrichment and ranking."""

from cartelera.etl.pipeline import (
    PipelineOptions,
    PipelineResult,
    main,
    run_pipeline,
    write_latest,
)

__all__ = [
    "PipelineOptions",
    "PipelineResult",
    "run_pipeline",
    "write_latest",
    "main",
]
