"""
Missing-value handling for the joined climate table.

Missingness is diagnosed before rows are removed so that clustering of
gaps in particular cities or periods shows up in the report. Rows are
dropped, never imputed.
"""

from dataclasses import dataclass
from typing import Any

import pandas as pd

from auclimate.normalization.columns import validate_required_columns
from auclimate.utils.logging import get_logger

log = get_logger(__name__)

MEASUREMENT_COLUMNS: tuple[str, ...] = ("rainfall", "temperature")

_CITY_SUMMARY_DTYPES: dict[str, str] = {
    "city": "object",
    "n_rows": "int64",
    "n_missing_rainfall": "int64",
    "missing_fraction": "float64",
    "first_date": "datetime64[ns]",
    "last_date": "datetime64[ns]",
    "first_missing": "datetime64[ns]",
    "last_missing": "datetime64[ns]",
}

_DATE_COLUMNS = ("first_date", "last_date", "first_missing", "last_missing")


@dataclass(frozen=True)
class MissingnessReport:
    """
    Missing-value diagnostic of the pre-drop table.

    Attributes:
        total_rows: Rows in the diagnosed table.
        incomplete_rows: Rows with at least one missing value.
        incomplete_fraction: incomplete_rows / total_rows (0.0 when empty).
        column_counts: Missing-value count per column.
        rainfall_by_city: Per city, over rows where temperature is present:
            n_rows, n_missing_rainfall, missing_fraction, first_date and
            last_date (coverage of the city), first_missing and last_missing
            (range of the rainfall gaps).
    """

    total_rows: int
    incomplete_rows: int
    incomplete_fraction: float
    column_counts: dict[str, int]
    rainfall_by_city: pd.DataFrame

    @property
    def total_missing(self) -> int:
        """Sum of missing values over all columns."""
        return sum(self.column_counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        by_city = self.rainfall_by_city.copy()
        for col in _DATE_COLUMNS:
            by_city[col] = by_city[col].dt.strftime("%Y-%m-%d")
        by_city = by_city.astype(object).where(by_city.notna(), None)
        return {
            "total_rows": self.total_rows,
            "incomplete_rows": self.incomplete_rows,
            "incomplete_fraction": self.incomplete_fraction,
            "column_counts": dict(self.column_counts),
            "rainfall_by_city": by_city.to_dict(orient="records"),
        }


def drop_unused_columns(df: pd.DataFrame, keep: list[str]) -> pd.DataFrame:
    """
    Keep only the configured columns, in configured order.

    Args:
        df: Joined table.
        keep: Columns to retain.

    Returns:
        New DataFrame restricted to `keep`.

    Raises:
        ValueError: If a kept column is absent.
    """
    validate_required_columns(df, keep)

    dropped = [c for c in df.columns if c not in keep]
    log.info("Dropped unused columns", dropped=dropped, kept=keep)

    return df[keep].copy()


def _rainfall_missing_by_city(df: pd.DataFrame) -> pd.DataFrame:
    """Per-city coverage and missing rainfall where temperature exists."""
    columns = list(_CITY_SUMMARY_DTYPES)
    if "rainfall" not in df.columns or "temperature" not in df.columns:
        return pd.DataFrame(
            {col: pd.Series(dtype=dtype) for col, dtype in _CITY_SUMMARY_DTYPES.items()}
        )

    with_temperature = df[df["temperature"].notna()]
    missing = with_temperature[with_temperature["rainfall"].isna()]

    coverage = with_temperature.groupby("city")["date"].agg(
        n_rows="size",
        first_date="min",
        last_date="max",
    )
    missing_stats = missing.groupby("city")["date"].agg(
        n_missing_rainfall="size",
        first_missing="min",
        last_missing="max",
    )

    summary = pd.concat([coverage, missing_stats], axis=1).reset_index()
    summary = summary.rename(columns={"index": "city"})
    summary["n_missing_rainfall"] = (
        summary["n_missing_rainfall"].fillna(0).astype(int)
    )
    summary["missing_fraction"] = summary["n_missing_rainfall"] / summary["n_rows"]
    for col in _DATE_COLUMNS:
        summary[col] = pd.to_datetime(summary[col])

    return (
        summary[columns]
        .sort_values("n_missing_rainfall", ascending=False, kind="stable")
        .reset_index(drop=True)
    )


def diagnose_missingness(df: pd.DataFrame) -> MissingnessReport:
    """
    Summarize missing values of the cleaned, not yet NA-dropped table.

    Pure function of its input.

    Args:
        df: Table after column pruning.

    Returns:
        MissingnessReport with per-column counts, the overall incomplete
        row fraction and the per-city rainfall breakdown.
    """
    na = df.isna()
    column_counts = {col: int(count) for col, count in na.sum().items()}
    incomplete_rows = int(na.any(axis=1).sum())
    total_rows = len(df)

    report = MissingnessReport(
        total_rows=total_rows,
        incomplete_rows=incomplete_rows,
        incomplete_fraction=incomplete_rows / total_rows if total_rows else 0.0,
        column_counts=column_counts,
        rainfall_by_city=_rainfall_missing_by_city(df),
    )

    log.info(
        "Diagnosed missing values",
        total_rows=total_rows,
        incomplete_rows=incomplete_rows,
        column_counts=column_counts,
    )
    return report


def drop_incomplete(
    df: pd.DataFrame,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """
    Remove every row with a missing value in the columns of interest.

    Idempotent: applying it to its own output returns an equal table.

    Args:
        df: Table to clean.
        columns: Columns that must be present; defaults to all columns.

    Returns:
        New NA-free DataFrame with a fresh index.
    """
    subset = columns if columns is not None else list(df.columns)
    validate_required_columns(df, subset)

    cleaned = df.dropna(subset=subset).reset_index(drop=True)

    log.info(
        "Dropped incomplete rows",
        rows_before=len(df),
        rows_after=len(cleaned),
        dropped=len(df) - len(cleaned),
    )
    return cleaned
