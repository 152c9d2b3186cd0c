"""
Per-source normalization.

Turns each raw table into one keyed by canonical (date, city) columns.
"""

import pandas as pd

from auclimate.config.settings import CleaningConfig, MultiDayPolicy, SourcesConfig
from auclimate.normalization.columns import normalize_city_names, normalize_columns
from auclimate.normalization.temporal import (
    combine_date_parts,
    filter_single_day_measurements,
    parse_dates,
)
from auclimate.utils.logging import get_logger

log = get_logger(__name__)


def normalize_rainfall(
    raw: pd.DataFrame,
    cleaning: CleaningConfig | None = None,
) -> pd.DataFrame:
    """
    Normalize the raw rainfall table.

    Applies the multi-day policy, builds the date from year/month/day
    and lowercases city names.

    Args:
        raw: Raw rainfall rows.
        cleaning: Cleaning configuration (multi-day policy).

    Returns:
        New DataFrame with `date` and `city` key columns.
    """
    cleaning = cleaning or CleaningConfig()

    df = normalize_columns(raw)
    if cleaning.multi_day_policy is MultiDayPolicy.DROP:
        df = filter_single_day_measurements(
            df, max_period_days=cleaning.max_period_days
        )
    else:
        log.info("Keeping multi-day rainfall measurements", rows=len(df))
    df = combine_date_parts(df)
    df = normalize_city_names(df)

    log.info("Normalized rainfall", rows=len(df), cities=df["city"].nunique())
    return df


def normalize_temperature(
    raw: pd.DataFrame,
    sources: SourcesConfig | None = None,
) -> pd.DataFrame:
    """
    Normalize the raw temperature table.

    Args:
        raw: Raw temperature rows.
        sources: Source configuration (date format).

    Returns:
        New DataFrame with `date` and `city` key columns.
    """
    sources = sources or SourcesConfig()

    df = normalize_columns(raw)
    df = parse_dates(df, "date", sources.temperature_date_format)
    df = normalize_city_names(df)

    log.info("Normalized temperature", rows=len(df), cities=df["city"].nunique())
    return df
