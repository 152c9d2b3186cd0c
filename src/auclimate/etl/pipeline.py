"""
Report pipeline implementation.

Runs load, normalize, join, clean, aggregate and analyze in order.
Each stage takes the previous stage's table as an argument and returns
a new one; nothing is shared between stages except those values.
"""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from auclimate.aggregation.views import AggregateViews, build_aggregates
from auclimate.analysis.trends import TrendModel, fit_all_trends, trends_to_frame
from auclimate.cleaning.missingness import (
    MissingnessReport,
    diagnose_missingness,
    drop_incomplete,
    drop_unused_columns,
)
from auclimate.config.settings import ReportPipelineConfig
from auclimate.errors import PipelineStageError
from auclimate.etl.join import join_climate
from auclimate.ingestion.climate import RainfallLoader, TemperatureLoader
from auclimate.normalization.sources import normalize_rainfall, normalize_temperature
from auclimate.schemas.climate import ClimateRecordSchema
from auclimate.utils.logging import get_logger, log_context

log = get_logger(__name__)


@dataclass
class PipelineResult:
    """
    Structured output of one report run.

    Attributes:
        joined: Joined table before column pruning.
        clean: NA-free climate table.
        missingness: Diagnostic of the pruned, pre-drop table.
        aggregates: Per-(city, date), per-date and per-year views.
        trends: Fitted trend models keyed by response.
    """

    joined: pd.DataFrame
    clean: pd.DataFrame
    missingness: MissingnessReport
    aggregates: AggregateViews
    trends: dict[str, TrendModel]

    @property
    def trend_table(self) -> pd.DataFrame:
        """Trend models as a summary table."""
        return trends_to_frame(self.trends)

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary (tables are summarized by shape and range)."""
        dates = self.clean["date"]
        return {
            "joined_rows": len(self.joined),
            "clean_rows": len(self.clean),
            "cities": sorted(self.clean["city"].unique().tolist()),
            "first_date": dates.min().strftime("%Y-%m-%d") if len(dates) else None,
            "last_date": dates.max().strftime("%Y-%m-%d") if len(dates) else None,
            "years": len(self.aggregates.yearly),
            "missingness": self.missingness.to_dict(),
            "trends": {name: m.to_dict() for name, m in self.trends.items()},
        }


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Bind the stage to log lines and wrap failures with the stage name."""
    with log_context(stage=name):
        log.info("Starting stage")
        try:
            yield
        except PipelineStageError:
            raise
        except Exception as e:
            log.error("Stage failed", error=f"{type(e).__name__}: {e}")
            raise PipelineStageError(name, e) from e
        log.info("Finished stage")


class ClimatePipeline:
    """
    Climate report pipeline.

    Loaders keep fetched tables for the lifetime of the pipeline, so a
    second run reuses them instead of refetching.
    """

    def __init__(self, config: ReportPipelineConfig) -> None:
        """
        Initialize pipeline.

        Args:
            config: Run configuration.
        """
        self.config = config
        self.rainfall_loader = RainfallLoader(config)
        self.temperature_loader = TemperatureLoader(config)

    def load(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Load raw rainfall and temperature tables."""
        with _stage("load"):
            return self.rainfall_loader.load(), self.temperature_loader.load()

    def normalize(
        self, rainfall: pd.DataFrame, temperature: pd.DataFrame
    ) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Bring both tables onto canonical (date, city) keys."""
        with _stage("normalize"):
            return (
                normalize_rainfall(rainfall, self.config.cleaning),
                normalize_temperature(temperature, self.config.sources),
            )

    def join(self, rainfall: pd.DataFrame, temperature: pd.DataFrame) -> pd.DataFrame:
        """Inner-join the normalized tables."""
        with _stage("join"):
            return join_climate(rainfall, temperature)

    def clean(self, joined: pd.DataFrame) -> tuple[pd.DataFrame, MissingnessReport]:
        """Prune columns, diagnose missingness, then drop incomplete rows."""
        with _stage("clean"):
            pruned = drop_unused_columns(joined, self.config.cleaning.keep_columns)
            pruned = ClimateRecordSchema.validate(pruned)
            report = diagnose_missingness(pruned)
            return drop_incomplete(pruned), report

    def aggregate(self, clean: pd.DataFrame) -> AggregateViews:
        """Build the per-city, per-day and per-year views."""
        with _stage("aggregate"):
            return build_aggregates(clean)

    def analyze(self, yearly: pd.DataFrame) -> dict[str, TrendModel]:
        """Fit the configured trend models."""
        with _stage("analyze"):
            return fit_all_trends(
                yearly,
                self.config.analysis.responses,
                min_points=self.config.analysis.min_years,
            )

    def run(self) -> PipelineResult:
        """
        Run all stages in order.

        Returns:
            PipelineResult with every intermediate a report needs.

        Raises:
            PipelineStageError: Naming the first stage that failed.
        """
        log.info(
            "Starting climate pipeline",
            project=self.config.project,
            rainfall=self.config.sources.rainfall,
            temperature=self.config.sources.temperature,
        )

        rainfall, temperature = self.load()
        rainfall, temperature = self.normalize(rainfall, temperature)
        joined = self.join(rainfall, temperature)
        clean, missingness = self.clean(joined)
        aggregates = self.aggregate(clean)
        trends = self.analyze(aggregates.yearly)

        log.info(
            "Climate pipeline complete",
            joined_rows=len(joined),
            clean_rows=len(clean),
            years=len(aggregates.yearly),
        )

        return PipelineResult(
            joined=joined,
            clean=clean,
            missingness=missingness,
            aggregates=aggregates,
            trends=trends,
        )


def run_pipeline(config: ReportPipelineConfig) -> PipelineResult:
    """
    Convenience function to run the full pipeline.

    Args:
        config: Run configuration.

    Returns:
        PipelineResult of the run.
    """
    return ClimatePipeline(config).run()


def _write_csv(df: pd.DataFrame, path: Path) -> Path:
    df.to_csv(path, index=False, date_format="%Y-%m-%d")
    return path


def save_results(result: PipelineResult, output_dir: Path) -> dict[str, Path]:
    """
    Write result tables as CSV and the summary as JSON.

    Args:
        result: Pipeline result.
        output_dir: Target directory (created if missing).

    Returns:
        Mapping of artifact name to written path.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "clean": result.clean,
        "city_daily": result.aggregates.city_daily,
        "national_daily": result.aggregates.national_daily,
        "yearly": result.aggregates.yearly,
        "missingness_by_city": result.missingness.rainfall_by_city,
        "trends": result.trend_table,
    }
    paths = {
        name: _write_csv(df, output_dir / f"{name}.csv") for name, df in tables.items()
    }

    summary_path = output_dir / "summary.json"
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, default=str)
    paths["summary"] = summary_path

    log.info("Saved results", output_dir=str(output_dir), files=len(paths))
    return paths
