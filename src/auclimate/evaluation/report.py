"""
Climate report generation.

Generates a self-contained HTML report with trend tables, missingness
diagnostics and embedded plots, and prints the same tables to the console.
"""

import base64
import html
import math
from datetime import datetime
from io import BytesIO
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure
from rich.console import Console
from rich.table import Table

from auclimate.analysis.trends import TrendModel, trends_to_frame
from auclimate.cleaning.missingness import MissingnessReport
from auclimate.config.settings import ReportPipelineConfig
from auclimate.etl.pipeline import PipelineResult
from auclimate.utils.logging import get_logger
from auclimate.visualization.plots import (
    plot_city_series,
    plot_missingness,
    plot_yearly_trends,
)

log = get_logger(__name__)


_STYLE = """
body { font-family: system-ui, sans-serif; max-width: 1100px; margin: 0 auto;
       padding: 24px; color: #222; background: #fafaf7; }
h1 { border-bottom: 3px solid #1f6f8b; padding-bottom: 8px; }
h2 { color: #1f6f8b; margin-top: 0; }
section { background: #fff; border: 1px solid #e3e3dc; border-radius: 6px;
          padding: 18px 22px; margin-bottom: 18px; }
dl.overview { display: grid; grid-template-columns: max-content 1fr; gap: 6px 18px; }
dl.overview dt { font-weight: 600; color: #555; }
dl.overview dd { margin: 0; }
table { border-collapse: collapse; margin: 12px 0; font-size: 0.92em; }
th, td { padding: 6px 10px; border-bottom: 1px solid #e3e3dc; text-align: right; }
th { background: #1f6f8b; color: #fff; }
td:first-child, th:first-child { text-align: left; }
figure { margin: 18px 0; text-align: center; }
figure img { max-width: 100%; }
figcaption { color: #555; font-size: 0.9em; }
.caveat { background: #fff4e5; border-left: 4px solid #d9822b; padding: 8px 12px; }
.generated { color: #888; font-size: 0.85em; }
"""


def _fmt(value: float, spec: str) -> str:
    """Format a float, rendering NaN as n/a."""
    if math.isnan(value):
        return "n/a"
    return format(value, spec)


def _fmt_date(value: pd.Timestamp) -> str:
    return value.strftime("%Y-%m-%d") if pd.notna(value) else "-"


def _figure(image: str, caption: str) -> str:
    caption = html.escape(caption)
    return (
        f'<figure><img src="data:image/png;base64,{image}" alt="{caption}">'
        f"<figcaption>{caption}</figcaption></figure>"
    )


def _fig_to_base64(fig: Figure) -> str:
    """Convert matplotlib figure to base64 PNG string and close it."""
    buf = BytesIO()
    fig.savefig(buf, format="png", dpi=120, bbox_inches="tight")
    plt.close(fig)
    buf.seek(0)
    return base64.b64encode(buf.read()).decode("utf-8")


def generate_trend_table(
    trends: dict[str, TrendModel],
    console: Console | None = None,
) -> tuple[pd.DataFrame, str]:
    """
    Generate the trend model summary table.

    Returns both a DataFrame and HTML string.
    """
    df = trends_to_frame(trends)

    if console is not None:
        table = Table(title="Yearly Trend Models (response ~ year)")
        table.add_column("Response", style="cyan")
        table.add_column("Slope / year", style="green", justify="right")
        table.add_column("Std. error", style="dim", justify="right")
        table.add_column("p-value", style="yellow", justify="right")
        table.add_column("R²", style="magenta", justify="right")
        table.add_column("Years", style="dim", justify="right")

        for model in trends.values():
            table.add_row(
                model.response,
                _fmt(model.slope, ".4g"),
                _fmt(model.slope_stderr, ".3g"),
                _fmt(model.p_value, ".3g"),
                _fmt(model.r_squared, ".4f"),
                str(model.n_years),
            )

        console.print(table)

    html_table = df.to_html(
        index=False,
        na_rep="n/a",
        float_format=lambda x: f"{x:.4g}",
        classes="trend-table",
    )
    return df, html_table


def generate_missingness_table(
    report: MissingnessReport,
    console: Console | None = None,
) -> tuple[pd.DataFrame, str]:
    """
    Generate the per-city missing rainfall table.

    Returns both a DataFrame and HTML string.
    """
    df = report.rainfall_by_city.copy()

    if console is not None:
        table = Table(
            title=(
                f"Missing Values: {report.incomplete_rows:,} of {report.total_rows:,} "
                f"rows incomplete ({report.incomplete_fraction:.1%})"
            )
        )
        table.add_column("City", style="cyan")
        table.add_column("Days", justify="right")
        table.add_column("Missing rainfall", style="yellow", justify="right")
        table.add_column("Share", style="yellow", justify="right")
        table.add_column("Covered from", style="dim")
        table.add_column("Covered to", style="dim")
        table.add_column("First missing", style="dim")
        table.add_column("Last missing", style="dim")

        for row in df.itertuples(index=False):
            table.add_row(
                row.city,
                f"{row.n_rows:,}",
                f"{row.n_missing_rainfall:,}",
                f"{row.missing_fraction:.1%}",
                _fmt_date(row.first_date),
                _fmt_date(row.last_date),
                _fmt_date(row.first_missing),
                _fmt_date(row.last_missing),
            )

        console.print(table)

    html_table = df.to_html(
        index=False,
        na_rep="-",
        float_format=lambda x: f"{x:.3f}",
        classes="missingness-table",
    )
    return df, html_table


def _column_counts_html(report: MissingnessReport) -> str:
    counts = pd.DataFrame(
        {
            "Column": list(report.column_counts),
            "Missing values": list(report.column_counts.values()),
        }
    )
    return counts.to_html(index=False, classes="counts-table")


def generate_html_report(
    result: PipelineResult,
    config: ReportPipelineConfig,
    output_path: Path,
    console: Console | None = None,
) -> Path:
    """
    Generate the complete HTML climate report.

    Args:
        result: Pipeline result.
        config: Run configuration (title and plot selections).
        output_path: Path to save the HTML report.
        console: Optional console for printing tables.

    Returns:
        Path to the generated report.
    """
    log.info("Generating climate report", output=str(output_path))

    _trend_df, trend_html = generate_trend_table(result.trends, console)
    _missing_df, missing_html = generate_missingness_table(
        result.missingness, console
    )
    counts_html = _column_counts_html(result.missingness)

    series_plots = []
    for selection in config.report.plots:
        caption = f"{selection.metric.value.title()} ({selection.layout.value})"
        if selection.date_range is not None:
            start, end = selection.date_range
            caption += f", {start} to {end}"
        fig = plot_city_series(result.aggregates.city_daily, selection)
        series_plots.append((caption, _fig_to_base64(fig)))

    trend_plot = _fig_to_base64(
        plot_yearly_trends(result.aggregates.yearly, result.trends)
    )
    missing_plot = _fig_to_base64(
        plot_missingness(result.missingness.rainfall_by_city)
    )

    summary = result.to_dict()
    title = html.escape(config.report.title)
    generated = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    cities = html.escape(", ".join(summary["cities"]))
    period = f"{summary['first_date']} to {summary['last_date']}"
    incomplete = f"{result.missingness.incomplete_fraction:.1%}"

    series_html = "\n".join(_figure(image, caption) for caption, image in series_plots)

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>{_STYLE}</style>
</head>
<body>
<h1>{title}</h1>
<p class="generated">Generated {generated}</p>

<section>
<h2>Dataset</h2>
<dl class="overview">
<dt>Joined rows</dt><dd>{summary['joined_rows']:,}</dd>
<dt>Complete rows</dt><dd>{summary['clean_rows']:,}</dd>
<dt>Cities</dt><dd>{cities}</dd>
<dt>Period</dt><dd>{period}</dd>
<dt>Years</dt><dd>{summary['years']}</dd>
</dl>
</section>

<section>
<h2>Missing values</h2>
<p class="caveat">{incomplete} of joined rows have a
missing value and are excluded from all aggregates. Rainfall gaps that
cluster in particular cities or periods bias the trends below.</p>
{counts_html}
{missing_html}
{_figure(missing_plot, "Missing rainfall by city")}
</section>

<section>
<h2>Daily series</h2>
{series_html}
</section>

<section>
<h2>Yearly trends</h2>
{trend_html}
{_figure(trend_plot, "Yearly aggregates with fitted OLS lines")}
</section>
</body>
</html>
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html_content, encoding="utf-8")

    log.info("Climate report saved", path=str(output_path))
    return output_path
