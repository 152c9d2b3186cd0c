"""Static charts of the aggregate views."""

from auclimate.visualization.plots import (
    Layout,
    Metric,
    PlotSelection,
    plot_city_series,
    plot_missingness,
    plot_yearly_trends,
    select_series,
)

__all__ = [
    "Layout",
    "Metric",
    "PlotSelection",
    "plot_city_series",
    "plot_missingness",
    "plot_yearly_trends",
    "select_series",
]
