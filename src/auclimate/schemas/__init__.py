"""
Schema definitions using Pandera for data validation.

Raw source tables are validated at load time; derived tables are
validated where the pipeline hands them between stages.
"""

from auclimate.schemas.climate import (
    CityDailySchema,
    ClimateRecordSchema,
    YearlyAggregateSchema,
)
from auclimate.schemas.sources import RawRainfallSchema, RawTemperatureSchema

__all__ = [
    "CityDailySchema",
    "ClimateRecordSchema",
    "RawRainfallSchema",
    "RawTemperatureSchema",
    "YearlyAggregateSchema",
]
