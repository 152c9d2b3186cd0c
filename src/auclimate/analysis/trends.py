"""
Univariate trend regressions.

Each yearly aggregate is regressed on year alone by ordinary least
squares. The slope, its two-sided p-value against a zero slope and R²
are reported per model. Degenerate inputs produce NaN statistics
instead of raising.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
import pandas as pd
from scipy import stats

from auclimate.config.settings import YEARLY_RESPONSES
from auclimate.normalization.columns import validate_required_columns
from auclimate.utils.logging import get_logger

log = get_logger(__name__)

MIN_POINTS = 3


@dataclass(frozen=True)
class TrendModel:
    """
    Fitted `response ~ year` model.

    Attributes:
        response: Name of the yearly aggregate column.
        slope: Change of the response per year.
        intercept: Response at year 0.
        slope_stderr: Standard error of the slope.
        p_value: Two-sided p-value of the slope against zero.
        r_squared: Coefficient of determination.
        n_years: Number of years used (NaN responses excluded).
        degenerate: True when the fit is undefined; statistics are NaN.
    """

    response: str
    slope: float
    intercept: float
    slope_stderr: float
    p_value: float
    r_squared: float
    n_years: int
    degenerate: bool = False

    def is_significant(self, alpha: float = 0.05) -> bool:
        """Whether the slope differs from zero at level alpha."""
        return not self.degenerate and self.p_value < alpha

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary (NaN becomes None)."""
        return {
            key: None if isinstance(value, float) and math.isnan(value) else value
            for key, value in asdict(self).items()
        }

    def __str__(self) -> str:
        """String representation."""
        if self.degenerate:
            return f"{self.response} ~ year: undefined (n={self.n_years})"
        return (
            f"{self.response} ~ year: slope={self.slope:.4g}, "
            f"p={self.p_value:.3g}, R²={self.r_squared:.4f} (n={self.n_years})"
        )


def _degenerate(response: str, n_years: int) -> TrendModel:
    nan = float("nan")
    return TrendModel(
        response=response,
        slope=nan,
        intercept=nan,
        slope_stderr=nan,
        p_value=nan,
        r_squared=nan,
        n_years=n_years,
        degenerate=True,
    )


def fit_trend(
    yearly: pd.DataFrame,
    response: str,
    min_points: int = MIN_POINTS,
) -> TrendModel:
    """
    Fit `response ~ year` by ordinary least squares.

    Rows with a NaN response are excluded from this model only.

    Args:
        yearly: Yearly aggregate table.
        response: Column to regress on year.
        min_points: Fewest years for a defined fit (at least 3).

    Returns:
        TrendModel; degenerate when fewer than `min_points` years remain
        or either variable has zero variance.
    """
    validate_required_columns(yearly, ["year", response])

    data = yearly[["year", response]].dropna()
    x = data["year"].to_numpy(dtype=float)
    y = data[response].to_numpy(dtype=float)
    n_years = len(data)

    if n_years < max(min_points, MIN_POINTS) or np.ptp(x) == 0 or np.ptp(y) == 0:
        log.warning("Degenerate trend model", response=response, n_years=n_years)
        return _degenerate(response, n_years)

    result = stats.linregress(x, y)

    model = TrendModel(
        response=response,
        slope=float(result.slope),
        intercept=float(result.intercept),
        slope_stderr=float(result.stderr),
        p_value=float(result.pvalue),
        r_squared=float(result.rvalue) ** 2,
        n_years=n_years,
    )
    log.info(
        "Fitted trend model",
        response=response,
        slope=model.slope,
        p_value=model.p_value,
        r_squared=model.r_squared,
        n_years=n_years,
    )
    return model


def fit_all_trends(
    yearly: pd.DataFrame,
    responses: list[str] | None = None,
    min_points: int = MIN_POINTS,
) -> dict[str, TrendModel]:
    """
    Fit one independent trend model per yearly response.

    Args:
        yearly: Yearly aggregate table.
        responses: Columns to model; defaults to the mean and sd of
            rainfall and temperature.
        min_points: Fewest years for a defined fit.

    Returns:
        Mapping of response name to fitted model, in request order.
    """
    responses = responses or list(YEARLY_RESPONSES)
    return {r: fit_trend(yearly, r, min_points=min_points) for r in responses}


def trends_to_frame(models: dict[str, TrendModel]) -> pd.DataFrame:
    """Summary table with one row per model."""
    columns = [
        "response",
        "slope",
        "intercept",
        "slope_stderr",
        "p_value",
        "r_squared",
        "n_years",
        "degenerate",
    ]
    return pd.DataFrame([asdict(m) for m in models.values()], columns=columns)
