"""
Pandera schemas for the raw rainfall and temperature CSVs.

Only the columns the pipeline reads are declared; station metadata
(station_code, lat, long, site_name, ...) passes through unchecked.
"""

import pandera.pandas as pa
from pandera.typing import Series


class RawRainfallSchema(pa.DataFrameModel):
    """
    Schema for the daily rainfall table.

    One row per station and day. `period` is the number of days the
    measurement was accumulated over; it is absent for most rows.
    """

    city_name: Series[str] = pa.Field(description="City name, mixed case")
    year: Series[int] = pa.Field(ge=1800, le=2100, coerce=True)
    month: Series[int] = pa.Field(ge=1, le=12, coerce=True)
    day: Series[int] = pa.Field(ge=1, le=31, coerce=True)
    rainfall: Series[float] = pa.Field(
        ge=0.0,
        nullable=True,
        coerce=True,
        description="Rainfall in millimetres",
    )
    period: Series[float] = pa.Field(
        ge=1.0,
        nullable=True,
        coerce=True,
        description="Accumulation period in days",
    )

    class Config:
        """Schema configuration."""

        name = "RawRainfallSchema"
        strict = False  # Allow extra columns


class RawTemperatureSchema(pa.DataFrameModel):
    """
    Schema for the daily temperature table.

    Dates stay as strings here; the normalization layer parses them
    with an explicit format so malformed values fail loudly.
    """

    city_name: Series[str] = pa.Field(description="City name, upper case in source")
    date: Series[str] = pa.Field(description="Measurement date as text")
    temperature: Series[float] = pa.Field(
        nullable=True,
        coerce=True,
        description="Temperature in degrees Celsius",
    )

    class Config:
        """Schema configuration."""

        name = "RawTemperatureSchema"
        strict = False
