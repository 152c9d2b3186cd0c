"""
Date handling for the climate tables.

Builds calendar dates from their source representations and filters
rows by date. Malformed dates raise ParseError instead of becoming NaT.
"""

from datetime import date

import pandas as pd

from auclimate.errors import ParseError
from auclimate.normalization.columns import validate_required_columns
from auclimate.utils.logging import get_logger

log = get_logger(__name__)


def combine_date_parts(
    df: pd.DataFrame,
    parts: tuple[str, str, str] = ("year", "month", "day"),
    output_column: str = "date",
) -> pd.DataFrame:
    """
    Combine integer year, month and day columns into one date column.

    The component columns are kept; the cleaning stage drops them.

    Args:
        df: DataFrame with the date component columns.
        parts: Names of the (year, month, day) columns.
        output_column: Name of the new date column.

    Returns:
        New DataFrame with the date column added.

    Raises:
        ParseError: If any row is not a valid calendar date.
    """
    validate_required_columns(df, list(parts))

    components = df[list(parts)].set_axis(["year", "month", "day"], axis=1)
    try:
        dates = pd.to_datetime(components, errors="raise")
    except (ValueError, TypeError, OverflowError) as e:
        msg = f"Invalid calendar date in columns {list(parts)}: {e}"
        raise ParseError(msg) from e

    df = df.copy()
    df[output_column] = dates.astype("datetime64[ns]")
    return df


def parse_dates(
    df: pd.DataFrame,
    column: str = "date",
    date_format: str = "%Y-%m-%d",
) -> pd.DataFrame:
    """
    Parse a text date column with an explicit format.

    Args:
        df: DataFrame with a date column.
        column: Name of the date column.
        date_format: strptime format every value must match.

    Returns:
        New DataFrame with the column converted to datetime64.

    Raises:
        ParseError: If any value is missing or does not match the format.
    """
    validate_required_columns(df, [column])

    if df[column].isna().any():
        n_missing = int(df[column].isna().sum())
        msg = f"Column '{column}' has {n_missing} missing dates"
        raise ParseError(msg)

    try:
        parsed = pd.to_datetime(df[column], format=date_format, errors="raise")
    except (ValueError, TypeError) as e:
        msg = f"Column '{column}' does not match format {date_format!r}: {e}"
        raise ParseError(msg) from e

    df = df.copy()
    df[column] = parsed.dt.normalize().astype("datetime64[ns]")
    return df


def filter_single_day_measurements(
    df: pd.DataFrame,
    period_column: str = "period",
    max_period_days: int = 1,
) -> pd.DataFrame:
    """
    Drop rainfall measurements accumulated over several days.

    Rows whose period is absent count as single-day measurements.

    Args:
        df: Rainfall DataFrame.
        period_column: Name of the accumulation period column.
        max_period_days: Longest period kept.

    Returns:
        Filtered DataFrame.
    """
    if period_column not in df.columns:
        log.warning("Period column not found, keeping all rows", column=period_column)
        return df.copy()

    period = df[period_column]
    mask = period.isna() | (period <= max_period_days)
    filtered = df[mask].copy()

    log.info(
        "Dropped multi-day rainfall measurements",
        max_period_days=max_period_days,
        rows_before=len(df),
        rows_after=len(filtered),
    )

    return filtered


def filter_date_range(
    df: pd.DataFrame,
    start: date | None = None,
    end: date | None = None,
    date_column: str = "date",
) -> pd.DataFrame:
    """
    Keep rows whose date falls inside an inclusive window.

    Args:
        df: DataFrame with a datetime column.
        start: First date kept; None for no lower bound.
        end: Last date kept; None for no upper bound.
        date_column: Name of the date column.

    Returns:
        Filtered DataFrame.
    """
    validate_required_columns(df, [date_column])

    mask = pd.Series(True, index=df.index)
    if start is not None:
        mask &= df[date_column] >= pd.Timestamp(start)
    if end is not None:
        mask &= df[date_column] <= pd.Timestamp(end)

    filtered = df[mask].copy()
    log.debug(
        "Filtered to date range",
        start=str(start) if start else None,
        end=str(end) if end else None,
        rows_before=len(df),
        rows_after=len(filtered),
    )
    return filtered
