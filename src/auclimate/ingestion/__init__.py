"""
Data ingestion layer for loading raw data with schema validation.

All raw data loading happens through this module to ensure
consistent validation at system boundaries.
"""

from auclimate.ingestion.base import DataLoader
from auclimate.ingestion.climate import (
    RainfallLoader,
    TemperatureLoader,
    load_rainfall,
    load_temperature,
)

__all__ = [
    "DataLoader",
    "RainfallLoader",
    "TemperatureLoader",
    "load_rainfall",
    "load_temperature",
]
