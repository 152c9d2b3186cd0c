"""
Canonical column names and city keys.

Everything downstream of this module uses `city`, `date`, `rainfall`,
`temperature`, `period` and `quality`.
"""

from collections.abc import Sequence

import pandas as pd

from auclimate.utils.logging import get_logger

log = get_logger(__name__)

# Both sources carry the city as `city_name`; every other column
# (year, month, day, rainfall, period, quality, date, temperature, ...)
# is already canonical.
COLUMN_MAPPING: dict[str, str] = {
    "city_name": "city",
}


def normalize_columns(
    df: pd.DataFrame,
    mapping: dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    Rename source columns to their canonical names.

    Columns without an entry in the mapping keep their name.

    Args:
        df: Raw source table.
        mapping: Source-to-canonical names; replaces COLUMN_MAPPING if given.

    Returns:
        Renamed DataFrame (the input is not modified).
    """
    mapping = mapping or COLUMN_MAPPING
    renames = {src: dst for src, dst in mapping.items() if src in df.columns}

    log.debug("Renaming source columns", renames=renames)
    return df.rename(columns=renames)


def normalize_city_names(df: pd.DataFrame, column: str = "city") -> pd.DataFrame:
    """
    Lowercase and strip city identifiers.

    Rainfall uses "Sydney" and temperature "SYDNEY"; after this both
    match as "sydney". Internal whitespace runs collapse to one space.
    Missing names stay missing.
    """
    validate_required_columns(df, [column])

    df = df.copy()
    df[column] = (
        df[column].str.replace(r"\s+", " ", regex=True).str.strip().str.lower()
    )

    log.debug("Normalized city names", cities=sorted(df[column].dropna().unique()))
    return df


def validate_required_columns(
    df: pd.DataFrame,
    required: Sequence[str],
    *,
    raise_on_missing: bool = True,
) -> list[str]:
    """
    Return the required columns absent from `df`, in request order.

    Raises:
        ValueError: If any are absent and `raise_on_missing` is set.
    """
    present = set(df.columns)
    missing = [col for col in required if col not in present]

    if not missing:
        return []
    if raise_on_missing:
        msg = f"Missing required columns: {missing} (have {list(df.columns)})"
        raise ValueError(msg)

    log.warning("Required columns absent", missing=missing)
    return missing
