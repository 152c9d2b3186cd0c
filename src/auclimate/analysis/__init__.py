"""Ordinary least squares trend models of yearly aggregates."""

from auclimate.analysis.trends import (
    TrendModel,
    fit_all_trends,
    fit_trend,
    trends_to_frame,
)

__all__ = ["TrendModel", "fit_all_trends", "fit_trend", "trends_to_frame"]
