"""
Chart rendering for the climate report.

Plots are driven by a PlotSelection (metric, layout, date window)
rather than by column-name strings. `select_series` is the pure data
selector; the plot functions only draw what it returns.
"""

import math

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from auclimate.analysis.trends import TrendModel
from auclimate.config.settings import Layout, Metric, PlotSelection
from auclimate.normalization.columns import validate_required_columns
from auclimate.normalization.temporal import filter_date_range
from auclimate.utils.logging import get_logger

log = get_logger(__name__)

__all__ = [
    "Layout",
    "Metric",
    "PlotSelection",
    "plot_city_series",
    "plot_missingness",
    "plot_yearly_trends",
    "select_series",
]


def select_series(city_daily: pd.DataFrame, selection: PlotSelection) -> pd.DataFrame:
    """
    Select the (city, date, value) rows a plot shows.

    Args:
        city_daily: Per-(city, date) view.
        selection: Metric and date window to select.

    Returns:
        DataFrame with columns city, date, value sorted by city and date.
    """
    column = selection.metric.column
    validate_required_columns(city_daily, ["city", "date", column])

    start, end = selection.date_range or (None, None)
    window = filter_date_range(city_daily, start, end)

    return (
        window[["city", "date", column]]
        .rename(columns={column: "value"})
        .sort_values(["city", "date"], kind="stable")
        .reset_index(drop=True)
    )


def plot_city_series(city_daily: pd.DataFrame, selection: PlotSelection) -> Figure:
    """
    Draw one metric over time for each city.

    FACETED draws a panel per city with a shared y-axis; OVERLAID
    draws every city on one axis with a legend.
    """
    series = select_series(city_daily, selection)
    cities = sorted(series["city"].unique())
    metric = selection.metric

    if selection.layout is Layout.FACETED and cities:
        n_cols = min(3, len(cities))
        n_rows = math.ceil(len(cities) / n_cols)
        fig, axes = plt.subplots(
            n_rows,
            n_cols,
            figsize=(5 * n_cols, 3 * n_rows),
            sharey=True,
            squeeze=False,
        )
        flat_axes = axes.ravel()
        for ax, city in zip(flat_axes, cities):
            city_rows = series[series["city"] == city]
            ax.plot(city_rows["date"], city_rows["value"], linewidth=0.6)
            ax.set_title(city.title(), fontsize=11)
            ax.grid(True, alpha=0.3)
        for ax in flat_axes[len(cities) :]:
            ax.set_visible(False)
        for ax in axes[:, 0]:
            ax.set_ylabel(metric.label, fontsize=10)
    else:
        fig, ax = plt.subplots(figsize=(10, 5))
        for city in cities:
            city_rows = series[series["city"] == city]
            ax.plot(
                city_rows["date"],
                city_rows["value"],
                linewidth=0.6,
                label=city.title(),
            )
        ax.set_ylabel(metric.label, fontsize=11)
        ax.set_xlabel("Date", fontsize=11)
        if cities:
            ax.legend(loc="upper left", fontsize=9)
        ax.grid(True, alpha=0.3)

    fig.suptitle(f"Daily {metric.value} by city", fontsize=12)
    fig.tight_layout()

    log.debug(
        "Plotted city series",
        metric=metric.value,
        layout=selection.layout.value,
        cities=len(cities),
        points=len(series),
    )
    return fig


def plot_yearly_trends(
    yearly: pd.DataFrame,
    trends: dict[str, TrendModel],
) -> Figure:
    """Draw each yearly aggregate with its fitted trend line."""
    responses = list(trends)
    n_cols = 2
    n_rows = max(1, math.ceil(len(responses) / n_cols))
    fig, axes = plt.subplots(n_rows, n_cols, figsize=(12, 4 * n_rows), squeeze=False)
    flat_axes = axes.ravel()

    for ax, response in zip(flat_axes, responses):
        model = trends[response]
        ax.scatter(
            yearly["year"], yearly[response], s=12, c="steelblue", edgecolors="none"
        )

        if not model.degenerate:
            years = yearly["year"].astype(float)
            x_line = np.array([years.min(), years.max()])
            y_line = model.intercept + model.slope * x_line
            ax.plot(x_line, y_line, "r--", linewidth=1.5)
            annotation = (
                f"slope = {model.slope:.4g}\n"
                f"p = {model.p_value:.3g}\n"
                f"R² = {model.r_squared:.3f}"
            )
        else:
            annotation = "trend undefined"

        ax.text(
            0.05,
            0.95,
            annotation,
            transform=ax.transAxes,
            fontsize=9,
            verticalalignment="top",
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8},
        )
        ax.set_title(response.replace("_", " "), fontsize=11)
        ax.set_xlabel("Year", fontsize=10)
        ax.grid(True, alpha=0.3)

    for ax in flat_axes[len(responses) :]:
        ax.set_visible(False)

    fig.tight_layout()
    return fig


def plot_missingness(rainfall_by_city: pd.DataFrame) -> Figure:
    """Bar chart of missing rainfall share per city."""
    fig, ax = plt.subplots(figsize=(8, max(3, 0.5 * len(rainfall_by_city) + 1)))

    ordered = rainfall_by_city.sort_values("missing_fraction")
    bars = ax.barh(
        [c.title() for c in ordered["city"]],
        ordered["missing_fraction"] * 100,
        color="steelblue",
        edgecolor="none",
    )
    for bar, n_missing in zip(bars, ordered["n_missing_rainfall"]):
        ax.text(
            bar.get_width() + 0.3,
            bar.get_y() + bar.get_height() / 2,
            f"{n_missing:,}",
            va="center",
            fontsize=9,
        )

    ax.set_xlabel("Days with temperature but no rainfall (%)", fontsize=11)
    ax.set_title("Missing rainfall by city", fontsize=12)
    ax.grid(axis="x", alpha=0.3)
    fig.tight_layout()
    return fig
