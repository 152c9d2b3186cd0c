"""
Rainfall and temperature ingestion.

Both tables are plain CSVs with a header row, published together as
the Australian climate dataset.
"""

import pandas as pd

from auclimate.config.settings import ReportPipelineConfig
from auclimate.ingestion.base import DataLoader
from auclimate.schemas.sources import RawRainfallSchema, RawTemperatureSchema


class RainfallLoader(DataLoader[RawRainfallSchema]):
    """Loader for the daily rainfall table."""

    def __init__(self, config: ReportPipelineConfig) -> None:
        """Initialize rainfall loader."""
        super().__init__(config, RawRainfallSchema)

    @property
    def source(self) -> str:
        """Configured rainfall source."""
        return self.config.sources.rainfall


class TemperatureLoader(DataLoader[RawTemperatureSchema]):
    """Loader for the daily temperature table."""

    def __init__(self, config: ReportPipelineConfig) -> None:
        """Initialize temperature loader."""
        super().__init__(config, RawTemperatureSchema)

    @property
    def source(self) -> str:
        """Configured temperature source."""
        return self.config.sources.temperature


def load_rainfall(
    config: ReportPipelineConfig, *, validate: bool = True
) -> pd.DataFrame:
    """
    Convenience function to load the rainfall table.

    Args:
        config: Run configuration.
        validate: Whether to validate against schema.

    Returns:
        DataFrame with raw rainfall rows.
    """
    return RainfallLoader(config).load(validate=validate)


def load_temperature(
    config: ReportPipelineConfig, *, validate: bool = True
) -> pd.DataFrame:
    """
    Convenience function to load the temperature table.

    Args:
        config: Run configuration.
        validate: Whether to validate against schema.

    Returns:
        DataFrame with raw temperature rows.
    """
    return TemperatureLoader(config).load(validate=validate)
