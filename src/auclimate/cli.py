"""Command-line interface for the climate report pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from auclimate.config.settings import ReportPipelineConfig

app = typer.Typer(
    name="auclimate",
    help="Rainfall and temperature trend report for Australian cities.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file. Uses the public datasets if omitted.",
        exists=True,
        dir_okay=False,
    ),
]


def _load_config(config: Path | None) -> "ReportPipelineConfig":
    """Load the given config file, or the defaults."""
    from auclimate.config.loader import default_config, load_config

    if config is None:
        console.print("[dim]No config given, using public data sources[/dim]")
        return default_config()

    console.print(f"[blue]Loading configuration from {config}[/blue]")
    try:
        return load_config(config)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines."),
    ] = False,
) -> None:
    """Configure logging for every command."""
    from auclimate.utils.logging import configure_logging

    try:
        configure_logging(level=log_level, json_output=json_logs)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def run(
    config: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory for result tables. Default: output/{project}/results.",
        ),
    ] = None,
    report: Annotated[
        Path | None,
        typer.Option(
            "--report",
            "-r",
            help="Path for the HTML report. Default: output/{project}/report.html.",
        ),
    ] = None,
    no_report: Annotated[
        bool,
        typer.Option("--no-report", help="Skip HTML report generation."),
    ] = False,
) -> None:
    """Run the full pipeline, save result tables and render the report."""
    from auclimate.errors import PipelineStageError
    from auclimate.etl.pipeline import run_pipeline, save_results
    from auclimate.evaluation.report import generate_html_report

    pipeline_config = _load_config(config)
    output = output or pipeline_config.results_dir
    report = report or pipeline_config.report_path

    console.print(f"[blue]Running pipeline for {pipeline_config.project}[/blue]")

    try:
        result = run_pipeline(pipeline_config)
    except PipelineStageError as e:
        console.print(f"[red]Run could not complete: stage '{e.stage}' failed[/red]")
        console.print(f"[red]{type(e.cause).__name__}: {e.cause}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title="Pipeline Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Joined rows", f"{len(result.joined):,}")
    table.add_row("Complete rows", f"{len(result.clean):,}")
    table.add_row("Cities", str(result.clean["city"].nunique()))
    table.add_row("Years", str(len(result.aggregates.yearly)))
    table.add_row(
        "Incomplete rows dropped",
        f"{result.missingness.incomplete_rows:,} "
        f"({result.missingness.incomplete_fraction:.1%})",
    )
    console.print(table)

    paths = save_results(result, output)
    console.print(f"\n[green]Saved {len(paths)} result files to: {output}[/green]")

    if no_report:
        return

    path = generate_html_report(result, pipeline_config, report, console=console)
    console.print(f"[green]Report saved to: {path}[/green]")


@app.command()
def missingness(config: ConfigOption = None) -> None:
    """Show the missing-value diagnostic of the joined data."""
    from auclimate.errors import PipelineStageError
    from auclimate.etl.pipeline import ClimatePipeline
    from auclimate.evaluation.report import generate_missingness_table

    pipeline = ClimatePipeline(_load_config(config))

    try:
        rainfall, temperature = pipeline.normalize(*pipeline.load())
        _clean, report = pipeline.clean(pipeline.join(rainfall, temperature))
    except PipelineStageError as e:
        console.print(f"[red]Run could not complete: stage '{e.stage}' failed[/red]")
        console.print(f"[red]{type(e.cause).__name__}: {e.cause}[/red]")
        raise typer.Exit(code=1) from e

    counts = Table(title="Missing Values per Column")
    counts.add_column("Column", style="cyan")
    counts.add_column("Missing", style="yellow", justify="right")
    for column, count in report.column_counts.items():
        counts.add_row(column, f"{count:,}")
    console.print(counts)

    generate_missingness_table(report, console)


@app.command()
def trends(config: ConfigOption = None) -> None:
    """Fit and show the yearly trend models."""
    from auclimate.errors import PipelineStageError
    from auclimate.etl.pipeline import run_pipeline
    from auclimate.evaluation.report import generate_trend_table

    pipeline_config = _load_config(config)

    try:
        result = run_pipeline(pipeline_config)
    except PipelineStageError as e:
        console.print(f"[red]Run could not complete: stage '{e.stage}' failed[/red]")
        console.print(f"[red]{type(e.cause).__name__}: {e.cause}[/red]")
        raise typer.Exit(code=1) from e

    generate_trend_table(result.trends, console)

    for model in result.trends.values():
        if model.degenerate:
            console.print(
                f"[yellow]{model.response}: too few years for a trend[/yellow]"
            )
        elif model.is_significant():
            direction = "increasing" if model.slope > 0 else "decreasing"
            console.print(f"[green]{model.response}: {direction} (p < 0.05)[/green]")
        else:
            console.print(f"[dim]{model.response}: no significant trend[/dim]")


if __name__ == "__main__":
    app()
