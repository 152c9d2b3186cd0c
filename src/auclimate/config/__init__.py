"""
Configuration management with typed Pydantic models.

Provides explicit source, cleaning and analysis parameterization and
environment-aware configuration loading.
"""

from auclimate.config.loader import default_config, load_config
from auclimate.config.settings import (
    YEARLY_RESPONSES,
    AnalysisConfig,
    CleaningConfig,
    Layout,
    Metric,
    MultiDayPolicy,
    OutputConfig,
    PlotSelection,
    ReportConfig,
    ReportPipelineConfig,
    SourcesConfig,
)

__all__ = [
    "YEARLY_RESPONSES",
    "AnalysisConfig",
    "CleaningConfig",
    "Layout",
    "Metric",
    "MultiDayPolicy",
    "OutputConfig",
    "PlotSelection",
    "ReportConfig",
    "ReportPipelineConfig",
    "SourcesConfig",
    "default_config",
    "load_config",
]
