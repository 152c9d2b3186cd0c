"""
Aggregation views over the cleaned climate table.

Three reductions feed the report: a per-(city, date) view, a national
daily series and yearly means/standard deviations for the trend models.
"""

from dataclasses import dataclass

import pandas as pd

from auclimate.cleaning.missingness import MEASUREMENT_COLUMNS
from auclimate.normalization.columns import validate_required_columns
from auclimate.schemas.climate import CityDailySchema, YearlyAggregateSchema
from auclimate.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class AggregateViews:
    """The three aggregate tables derived from one cleaned table."""

    city_daily: pd.DataFrame
    national_daily: pd.DataFrame
    yearly: pd.DataFrame


def _measurements(df: pd.DataFrame) -> list[str]:
    return [col for col in MEASUREMENT_COLUMNS if col in df.columns]


def aggregate_city_daily(clean: pd.DataFrame) -> pd.DataFrame:
    """
    Mean rainfall and temperature per (city, date).

    Collapses duplicate keys left by the join, e.g. the separate
    maximum and minimum temperature rows of one day.

    Args:
        clean: NA-free climate table.

    Returns:
        DataFrame unique on (city, date), sorted by city then date.
    """
    validate_required_columns(clean, ["city", "date"])

    city_daily = (
        clean.groupby(["city", "date"], as_index=False)[_measurements(clean)]
        .mean()
        .sort_values(["city", "date"], kind="stable")
        .reset_index(drop=True)
    )
    city_daily = CityDailySchema.validate(city_daily)

    log.info(
        "Aggregated per city and day",
        rows_before=len(clean),
        rows_after=len(city_daily),
    )
    return city_daily


def aggregate_national_daily(clean: pd.DataFrame) -> pd.DataFrame:
    """
    Mean rainfall and temperature per date across all cities.

    Computed directly from the cleaned rows, so each row carries equal
    weight. This equals the mean of the per-city means only when every
    city contributes the same number of rows on a date.

    Args:
        clean: NA-free climate table.

    Returns:
        DataFrame with one row per date, sorted by date.
    """
    validate_required_columns(clean, ["date"])

    national = (
        clean.groupby("date", as_index=False)[_measurements(clean)]
        .mean()
        .sort_values("date", kind="stable")
        .reset_index(drop=True)
    )

    log.info("Aggregated per day", rows=len(national))
    return national


def aggregate_yearly(city_daily: pd.DataFrame) -> pd.DataFrame:
    """
    Yearly mean and sample standard deviation of each measurement.

    Averages over all cities and days of a year. Years with a single
    observation get a NaN standard deviation.

    Args:
        city_daily: Per-(city, date) view.

    Returns:
        DataFrame with year, mean_*/sd_* columns and n_observations.
    """
    validate_required_columns(city_daily, ["date", *MEASUREMENT_COLUMNS])

    grouped = city_daily.groupby(city_daily["date"].dt.year.rename("year"))

    yearly = pd.DataFrame(
        {
            "mean_rainfall": grouped["rainfall"].mean(),
            "sd_rainfall": grouped["rainfall"].std(ddof=1),
            "mean_temperature": grouped["temperature"].mean(),
            "sd_temperature": grouped["temperature"].std(ddof=1),
            "n_observations": grouped.size(),
        }
    ).reset_index()
    yearly["year"] = yearly["year"].astype(int)
    yearly = yearly.sort_values("year").reset_index(drop=True)
    yearly = YearlyAggregateSchema.validate(yearly)

    log.info(
        "Aggregated per year",
        years=len(yearly),
        first_year=int(yearly["year"].min()) if len(yearly) else None,
        last_year=int(yearly["year"].max()) if len(yearly) else None,
    )
    return yearly


def build_aggregates(clean: pd.DataFrame) -> AggregateViews:
    """
    Build all three aggregate views from one cleaned table.

    The yearly view is derived from the per-(city, date) view.
    """
    city_daily = aggregate_city_daily(clean)
    return AggregateViews(
        city_daily=city_daily,
        national_daily=aggregate_national_daily(clean),
        yearly=aggregate_yearly(city_daily),
    )
