"""Pandera schemas for the joined and aggregated climate tables."""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series


class ClimateRecordSchema(pa.DataFrameModel):
    """
    Schema for the joined rainfall/temperature table.

    Keys are never null; measurements may be missing until cleaning.
    """

    city: Series[str] = pa.Field(description="Lowercased city name")
    date: Series[pa.DateTime] = pa.Field(description="Calendar date")
    rainfall: Series[float] | None = pa.Field(ge=0.0, nullable=True)
    temperature: Series[float] | None = pa.Field(nullable=True)

    @pa.check("city", name="lowercase_city")
    @classmethod
    def city_is_normalized(cls, city: Series[str]) -> Series[bool]:
        """City names are lowercase without surrounding whitespace."""
        return city == city.str.strip().str.lower()

    class Config:
        """Schema configuration."""

        name = "ClimateRecordSchema"
        strict = False


class CityDailySchema(pa.DataFrameModel):
    """Schema for the per-(city, date) mean view."""

    city: Series[str]
    date: Series[pa.DateTime]
    rainfall: Series[float] = pa.Field(ge=0.0)
    temperature: Series[float]

    class Config:
        """Schema configuration."""

        name = "CityDailySchema"
        strict = False
        unique = ["city", "date"]


class YearlyAggregateSchema(pa.DataFrameModel):
    """
    Schema for yearly aggregates.

    Standard deviations are NaN for years with a single observation.
    """

    year: Series[int] = pa.Field(unique=True)
    mean_rainfall: Series[float]
    sd_rainfall: Series[float] = pa.Field(nullable=True)
    mean_temperature: Series[float]
    sd_temperature: Series[float] = pa.Field(nullable=True)
    n_observations: Series[int] = pa.Field(ge=1)

    @pa.dataframe_check(name="sorted_years")
    @classmethod
    def years_ascending(cls, df: pd.DataFrame) -> bool:
        """Rows are ordered by year."""
        return bool(df["year"].is_monotonic_increasing)

    class Config:
        """Schema configuration."""

        name = "YearlyAggregateSchema"
        strict = False
