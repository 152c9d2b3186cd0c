"""
Relational join of the normalized rainfall and temperature tables.
"""

import pandas as pd

from auclimate.normalization.columns import validate_required_columns
from auclimate.utils.logging import get_logger

log = get_logger(__name__)

JOIN_KEYS: tuple[str, str] = ("date", "city")


def join_climate(
    rainfall: pd.DataFrame,
    temperature: pd.DataFrame,
    keys: tuple[str, ...] = JOIN_KEYS,
) -> pd.DataFrame:
    """
    Inner-join rainfall and temperature on (date, city).

    Unmatched rows from either side are dropped rather than kept as
    nulls. Rows with a null key never match anything. Overlapping
    non-key columns are suffixed with `_rainfall` / `_temperature`.

    Args:
        rainfall: Normalized rainfall table.
        temperature: Normalized temperature table.
        keys: Join key columns.

    Returns:
        Joined DataFrame with one row per matching key pair.
    """
    validate_required_columns(rainfall, list(keys))
    validate_required_columns(temperature, list(keys))

    # pandas merges NaN keys with each other; a relational join does not
    left = rainfall.dropna(subset=list(keys))
    right = temperature.dropna(subset=list(keys))

    joined = left.merge(
        right,
        on=list(keys),
        how="inner",
        suffixes=("_rainfall", "_temperature"),
    )

    right_keys = pd.MultiIndex.from_frame(right[list(keys)])
    unmatched = ~pd.MultiIndex.from_frame(left[list(keys)]).isin(right_keys)

    log.info(
        "Joined rainfall and temperature",
        rainfall_rows=len(rainfall),
        temperature_rows=len(temperature),
        joined_rows=len(joined),
        unmatched_rainfall=int(unmatched.sum()),
    )

    return joined.reset_index(drop=True)
