"""
Pipeline orchestration.

Joins the normalized sources and runs every stage of the report.
"""

from auclimate.etl.join import join_climate
from auclimate.etl.pipeline import (
    ClimatePipeline,
    PipelineResult,
    run_pipeline,
    save_results,
)

__all__ = [
    "ClimatePipeline",
    "PipelineResult",
    "join_climate",
    "run_pipeline",
    "save_results",
]
