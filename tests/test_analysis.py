"""Tests for trend regressions."""

import json
import math

import numpy as np
import pandas as pd
import pytest

from auclimate.analysis import (
    TrendModel,
    fit_all_trends,
    fit_trend,
    trends_to_frame,
)
from auclimate.config import YEARLY_RESPONSES


class TestFitTrend:
    """Tests for fit_trend."""

    def test_exact_linear_trend(self, linear_yearly: pd.DataFrame) -> None:
        """Test a noiseless decline recovers its slope with R² of 1."""
        model = fit_trend(linear_yearly, "mean_rainfall")

        assert model.slope == pytest.approx(-0.5)
        assert model.intercept == pytest.approx(100.0 + 0.5 * 1900)
        assert model.r_squared == pytest.approx(1.0)
        assert model.p_value < 1e-10
        assert model.n_years == 51
        assert not model.degenerate
        assert model.is_significant()

    def test_noisy_trend(self) -> None:
        """Test statistics against a direct least-squares solution."""
        rng = np.random.default_rng(42)
        years = np.arange(1950, 2020)
        values = 20.0 + 0.03 * (years - 1950) + rng.normal(0, 0.5, len(years))
        yearly = pd.DataFrame({"year": years, "mean_temperature": values})

        model = fit_trend(yearly, "mean_temperature")

        slope, intercept = np.polyfit(years, values, 1)
        assert model.slope == pytest.approx(slope)
        assert model.intercept == pytest.approx(intercept)
        assert 0.0 < model.r_squared < 1.0
        assert 0.0 <= model.p_value <= 1.0

    def test_no_trend_not_significant(self) -> None:
        """Test alternating values give a non-significant slope."""
        yearly = pd.DataFrame(
            {"year": np.arange(2000, 2010), "mean_rainfall": [1.0, 2.0] * 5}
        )
        model = fit_trend(yearly, "mean_rainfall")

        assert not model.degenerate
        assert not model.is_significant(alpha=0.05)

    def test_nan_response_excluded(self, linear_yearly: pd.DataFrame) -> None:
        """Test NaN years are dropped from this model only."""
        linear_yearly.loc[[0, 10, 20], "sd_rainfall"] = np.nan

        sd_model = fit_trend(linear_yearly, "sd_rainfall")
        mean_model = fit_trend(linear_yearly, "mean_rainfall")

        assert sd_model.n_years == 48
        assert sd_model.slope == pytest.approx(0.1)
        assert mean_model.n_years == 51

    @pytest.mark.parametrize("n_years", [0, 1, 2])
    def test_too_few_years_is_degenerate(self, n_years: int) -> None:
        """Test fewer than three points yield NaN statistics."""
        yearly = pd.DataFrame(
            {
                "year": np.arange(2000, 2000 + n_years),
                "mean_rainfall": np.arange(n_years, dtype=float),
            }
        )
        model = fit_trend(yearly, "mean_rainfall")

        assert model.degenerate
        assert model.n_years == n_years
        assert math.isnan(model.slope)
        assert math.isnan(model.p_value)
        assert math.isnan(model.r_squared)
        assert not model.is_significant()

    def test_constant_response_is_degenerate(self) -> None:
        """Test zero variance in the response yields NaN statistics."""
        yearly = pd.DataFrame(
            {"year": np.arange(2000, 2010), "mean_rainfall": np.full(10, 3.0)}
        )
        assert fit_trend(yearly, "mean_rainfall").degenerate

    def test_min_points_raises_threshold(self, linear_yearly: pd.DataFrame) -> None:
        """Test a larger minimum marks short series degenerate."""
        model = fit_trend(linear_yearly.head(10), "mean_rainfall", min_points=20)
        assert model.degenerate

    def test_missing_response_column(self, linear_yearly: pd.DataFrame) -> None:
        """Test an unknown response column raises."""
        with pytest.raises(ValueError, match="humidity"):
            fit_trend(linear_yearly, "humidity")


class TestTrendModel:
    """Tests for TrendModel."""

    def test_to_dict_nan_becomes_none(self) -> None:
        """Test degenerate statistics serialize as null."""
        nan = float("nan")
        model = TrendModel("sd_rainfall", nan, nan, nan, nan, nan, 1, degenerate=True)

        data = json.loads(json.dumps(model.to_dict()))
        assert data["slope"] is None
        assert data["n_years"] == 1
        assert data["degenerate"] is True

    def test_str(self, linear_yearly: pd.DataFrame) -> None:
        """Test readable summaries."""
        assert "slope=-0.5" in str(fit_trend(linear_yearly, "mean_rainfall"))
        assert "undefined" in str(fit_trend(linear_yearly.head(2), "mean_rainfall"))


class TestFitAllTrends:
    """Tests for fit_all_trends and trends_to_frame."""

    def test_default_responses(self, linear_yearly: pd.DataFrame) -> None:
        """Test one model per yearly response."""
        models = fit_all_trends(linear_yearly)

        assert list(models) == list(YEARLY_RESPONSES)
        assert models["mean_temperature"].slope == pytest.approx(0.02)
        assert models["sd_temperature"].slope == pytest.approx(-0.01)

    def test_independent_models(self, linear_yearly: pd.DataFrame) -> None:
        """Test a degenerate response does not affect the others."""
        linear_yearly["sd_rainfall"] = np.nan
        models = fit_all_trends(linear_yearly)

        assert models["sd_rainfall"].degenerate
        assert not models["mean_rainfall"].degenerate

    def test_selected_responses(self, linear_yearly: pd.DataFrame) -> None:
        """Test only requested responses are fitted."""
        models = fit_all_trends(linear_yearly, ["mean_temperature"])
        assert list(models) == ["mean_temperature"]

    def test_frame(self, linear_yearly: pd.DataFrame) -> None:
        """Test the summary table has one row per model."""
        frame = trends_to_frame(fit_all_trends(linear_yearly))

        assert frame["response"].tolist() == list(YEARLY_RESPONSES)
        assert frame["r_squared"].to_numpy() == pytest.approx(np.ones(4))
