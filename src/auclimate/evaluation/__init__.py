"""Report generation for pipeline results."""

from auclimate.evaluation.report import (
    generate_html_report,
    generate_missingness_table,
    generate_trend_table,
)

__all__ = [
    "generate_html_report",
    "generate_missingness_table",
    "generate_trend_table",
]
