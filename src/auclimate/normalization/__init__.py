"""
Data normalization layer for standardizing data formats.

Harmonizes column names, city casing and date representation so the
rainfall and temperature tables share a (date, city) key.
"""

from auclimate.normalization.columns import (
    COLUMN_MAPPING,
    normalize_city_names,
    normalize_columns,
    validate_required_columns,
)
from auclimate.normalization.sources import normalize_rainfall, normalize_temperature
from auclimate.normalization.temporal import (
    combine_date_parts,
    filter_date_range,
    filter_single_day_measurements,
    parse_dates,
)

__all__ = [
    "COLUMN_MAPPING",
    "combine_date_parts",
    "filter_date_range",
    "filter_single_day_measurements",
    "normalize_city_names",
    "normalize_columns",
    "normalize_rainfall",
    "normalize_temperature",
    "parse_dates",
    "validate_required_columns",
]
