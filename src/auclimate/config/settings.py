"""
Typed configuration models using Pydantic.

All run parameters are defined here with explicit typing and validation.
Processing code receives these objects instead of reading globals.
"""

from datetime import date
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

TIDYTUESDAY_BASE_URL = (
    "https://raw.githubusercontent.com/rfordatascience/tidytuesday/"
    "master/data/2020/2020-01-07"
)

REQUIRED_COLUMNS: tuple[str, ...] = ("city", "date", "rainfall", "temperature")

YEARLY_RESPONSES: tuple[str, ...] = (
    "mean_rainfall",
    "sd_rainfall",
    "mean_temperature",
    "sd_temperature",
)


class Metric(str, Enum):
    """Daily variable shown in a plot."""

    RAINFALL = "rainfall"
    TEMPERATURE = "temperature"

    @property
    def column(self) -> str:
        """Canonical column holding this metric."""
        return self.value

    @property
    def label(self) -> str:
        """Axis label with unit."""
        return "Rainfall (mm)" if self is Metric.RAINFALL else "Temperature (°C)"


class Layout(str, Enum):
    """How per-city series are arranged in a plot."""

    FACETED = "faceted"  # one panel per city
    OVERLAID = "overlaid"  # all cities on one axis


class MultiDayPolicy(str, Enum):
    """Treatment of rainfall measurements accumulated over several days."""

    DROP = "drop"  # keep only periods up to max_period_days
    KEEP = "keep"  # keep every row; totals over several days stay in


class PlotSelection(BaseModel):
    """Selection of metric, layout and inclusive date window for a plot."""

    model_config = ConfigDict(frozen=True)

    metric: Metric = Metric.TEMPERATURE
    layout: Layout = Layout.FACETED
    date_range: tuple[date, date] | None = Field(
        default=None, description="Inclusive (start, end); None selects all dates"
    )

    @field_validator("date_range")
    @classmethod
    def validate_date_range(
        cls, v: tuple[date, date] | None
    ) -> tuple[date, date] | None:
        """Ensure the window is ordered."""
        if v is not None and v[1] < v[0]:
            msg = f"date_range end {v[1]} is before start {v[0]}"
            raise ValueError(msg)
        return v


class SourcesConfig(BaseModel):
    """Locations of the two input tables (URLs or filesystem paths)."""

    model_config = ConfigDict(frozen=True)

    rainfall: str = Field(
        default=f"{TIDYTUESDAY_BASE_URL}/rainfall.csv",
        description="Rainfall CSV URL or path",
    )
    temperature: str = Field(
        default=f"{TIDYTUESDAY_BASE_URL}/temperature.csv",
        description="Temperature CSV URL or path",
    )
    temperature_date_format: str = Field(
        default="%Y-%m-%d", description="strptime format of the temperature date column"
    )


class CleaningConfig(BaseModel):
    """Column selection and multi-day rainfall policy."""

    model_config = ConfigDict(frozen=True)

    keep_columns: list[str] = Field(
        default_factory=lambda: ["city", "date", "rainfall", "temperature"],
        description="Columns retained after the join",
    )
    max_period_days: int = Field(
        default=1, ge=1, description="Longest accumulation period kept for rainfall"
    )
    multi_day_policy: MultiDayPolicy = Field(
        default=MultiDayPolicy.DROP,
        description="Treatment of rows with period > max_period_days",
    )

    @field_validator("keep_columns")
    @classmethod
    def validate_keep_columns(cls, v: list[str]) -> list[str]:
        """Join keys and both measurements must survive cleaning."""
        missing = [c for c in REQUIRED_COLUMNS if c not in v]
        if missing:
            msg = f"keep_columns is missing required columns: {missing}"
            raise ValueError(msg)
        return v


class AnalysisConfig(BaseModel):
    """Trend regression configuration."""

    model_config = ConfigDict(frozen=True)

    responses: list[str] = Field(default_factory=lambda: list(YEARLY_RESPONSES))
    min_years: int = Field(default=3, ge=3, description="Fewer points is degenerate")

    @field_validator("responses")
    @classmethod
    def validate_responses(cls, v: list[str]) -> list[str]:
        """Only yearly aggregate columns can be regressed on year."""
        unknown = [r for r in v if r not in YEARLY_RESPONSES]
        if unknown:
            msg = f"Unknown responses {unknown}; expected {list(YEARLY_RESPONSES)}"
            raise ValueError(msg)
        return v


class OutputConfig(BaseModel):
    """Output location. Structure: ./output/{project}/results, report.html."""

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(default=Path("./output"))


class ReportConfig(BaseModel):
    """HTML report configuration."""

    model_config = ConfigDict(frozen=True)

    title: str = "Australian City Climate Trends"
    plots: list[PlotSelection] = Field(
        default_factory=lambda: [
            PlotSelection(metric=Metric.TEMPERATURE, layout=Layout.FACETED),
            PlotSelection(metric=Metric.RAINFALL, layout=Layout.OVERLAID),
        ]
    )


class ReportPipelineConfig(BaseModel):
    """Complete run configuration."""

    model_config = ConfigDict(frozen=True)

    project: str = Field(default="au-climate", description="Project identifier")
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @property
    def results_dir(self) -> Path:
        """Directory for serialized tables and summary."""
        return self.output.output_root / self.project / "results"

    @property
    def report_path(self) -> Path:
        """Default HTML report path."""
        return self.output.output_root / self.project / "report.html"
