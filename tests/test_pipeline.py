"""Integration tests for the report pipeline."""

import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from auclimate.config.settings import (
    OutputConfig,
    ReportPipelineConfig,
    SourcesConfig,
)
from auclimate.errors import ParseError, PipelineStageError, SourceUnavailableError
from auclimate.etl import ClimatePipeline, PipelineResult, run_pipeline, save_results


def _config(tmp_path: Path, rainfall: Path, temperature: Path) -> ReportPipelineConfig:
    return ReportPipelineConfig(
        project="scenario",
        sources=SourcesConfig(rainfall=str(rainfall), temperature=str(temperature)),
        output=OutputConfig(output_root=tmp_path / "output"),
    )


@pytest.fixture
def result(local_config: ReportPipelineConfig) -> PipelineResult:
    """Pipeline run over the fixture CSVs."""
    return run_pipeline(local_config)


class TestRunPipeline:
    """Tests for a full run over local files."""

    def test_row_counts(self, result: PipelineResult) -> None:
        """Test joined and cleaned table sizes."""
        assert len(result.joined) == 6
        assert len(result.clean) == 4
        assert list(result.clean.columns) == ["city", "date", "rainfall", "temperature"]

    def test_joined_keeps_source_columns(self, result: PipelineResult) -> None:
        """Test columns are pruned after the join, not before."""
        assert {"station_code", "temp_type", "quality"} <= set(result.joined.columns)

    def test_missingness_before_drop(self, result: PipelineResult) -> None:
        """Test the diagnostic describes the pre-drop table."""
        assert result.missingness.total_rows == 6
        assert result.missingness.incomplete_rows == 2
        assert result.missingness.column_counts["rainfall"] == 1

    def test_aggregates(self, result: PipelineResult) -> None:
        """Test yearly aggregates of the fixture."""
        yearly = result.aggregates.yearly.set_index("year")

        assert yearly.index.tolist() == [2000, 2001]
        assert yearly.loc[2000, "mean_rainfall"] == pytest.approx(2.5)
        assert yearly.loc[2000, "mean_temperature"] == pytest.approx(22.0)

    def test_two_years_are_degenerate(self, result: PipelineResult) -> None:
        """Test trends over two years are undefined, not errors."""
        assert set(result.trends) == {
            "mean_rainfall",
            "sd_rainfall",
            "mean_temperature",
            "sd_temperature",
        }
        assert all(model.degenerate for model in result.trends.values())

    def test_summary(self, result: PipelineResult) -> None:
        """Test the serializable summary."""
        summary = json.loads(json.dumps(result.to_dict()))

        assert summary["cities"] == ["perth", "sydney"]
        assert summary["first_date"] == "2000-01-01"
        assert summary["last_date"] == "2001-06-15"
        assert summary["years"] == 2
        assert summary["trends"]["mean_rainfall"]["slope"] is None

    def test_multi_day_records_kept_when_allowed(
        self, local_config: ReportPipelineConfig
    ) -> None:
        """Test a wider accumulation window keeps Sydney 2000-01-03."""
        config = local_config.model_copy(
            update={
                "cleaning": local_config.cleaning.model_copy(
                    update={"max_period_days": 3}
                )
            }
        )
        result = run_pipeline(config)

        assert len(result.joined) == 7
        assert pd.Timestamp(2000, 1, 3) in set(result.clean["date"])


class TestEndToEndScenario:
    """Two-day Sydney scenario with one missing rainfall value."""

    def test_scenario(self, tmp_path: Path) -> None:
        """Test join, clean and yearly aggregate of the scenario."""
        rainfall = tmp_path / "rain.csv"
        temperature = tmp_path / "temp.csv"
        pd.DataFrame(
            {
                "city_name": ["Sydney", "Sydney"],
                "year": [2000, 2000],
                "month": [1, 1],
                "day": [1, 2],
                "rainfall": [5.0, np.nan],
                "period": [1, 1],
            }
        ).to_csv(rainfall, index=False)
        pd.DataFrame(
            {
                "city_name": ["SYDNEY", "SYDNEY"],
                "date": ["2000-01-01", "2000-01-02"],
                "temperature": [20.0, 21.0],
            }
        ).to_csv(temperature, index=False)

        result = run_pipeline(_config(tmp_path, rainfall, temperature))

        assert len(result.joined) == 2
        assert len(result.clean) == 1
        yearly = result.aggregates.yearly
        assert yearly["year"].tolist() == [2000]
        assert yearly["mean_rainfall"].iloc[0] == pytest.approx(5.0)
        assert np.isnan(yearly["sd_rainfall"].iloc[0])


class TestStageFailures:
    """Tests that failures name the stage they happened in."""

    def test_missing_source_fails_load(
        self, tmp_path: Path, temperature_csv: Path
    ) -> None:
        """Test an unreadable source fails in the load stage."""
        config = _config(tmp_path, tmp_path / "absent.csv", temperature_csv)

        with pytest.raises(PipelineStageError) as exc_info:
            run_pipeline(config)

        assert exc_info.value.stage == "load"
        assert isinstance(exc_info.value.cause, SourceUnavailableError)

    def test_invalid_date_fails_normalize(
        self, tmp_path: Path, rainfall_csv: Path, raw_temperature: pd.DataFrame
    ) -> None:
        """Test an impossible calendar date fails in the normalize stage."""
        raw_temperature.loc[0, "date"] = "2000-02-30"
        temperature = tmp_path / "bad_temperature.csv"
        raw_temperature.to_csv(temperature, index=False)

        with pytest.raises(PipelineStageError) as exc_info:
            run_pipeline(_config(tmp_path, rainfall_csv, temperature))

        assert exc_info.value.stage == "normalize"
        assert isinstance(exc_info.value.cause, ParseError)

    def test_wrong_columns_fail_load(
        self, tmp_path: Path, temperature_csv: Path
    ) -> None:
        """Test a table without the expected columns fails schema validation."""
        rainfall = tmp_path / "other.csv"
        rainfall.write_text("a,b\n1,2\n", encoding="utf-8")

        with pytest.raises(PipelineStageError) as exc_info:
            run_pipeline(_config(tmp_path, rainfall, temperature_csv))

        assert exc_info.value.stage == "load"
        assert isinstance(exc_info.value.cause, ParseError)


class TestClimatePipeline:
    """Tests for stage-by-stage use."""

    def test_loaders_cache_sources(self, local_config: ReportPipelineConfig) -> None:
        """Test a second load reuses fetched tables."""
        pipeline = ClimatePipeline(local_config)
        first, _ = pipeline.load()

        Path(local_config.sources.rainfall).unlink()
        second, _ = pipeline.load()

        pd.testing.assert_frame_equal(first, second)

    def test_stages_compose(self, local_config: ReportPipelineConfig) -> None:
        """Test running stages by hand matches run()."""
        pipeline = ClimatePipeline(local_config)
        rainfall, temperature = pipeline.normalize(*pipeline.load())
        clean, report = pipeline.clean(pipeline.join(rainfall, temperature))

        assert report.incomplete_rows == 2
        pd.testing.assert_frame_equal(clean, pipeline.run().clean)


class TestSaveResults:
    """Tests for save_results."""

    def test_writes_tables_and_summary(
        self, result: PipelineResult, tmp_path: Path
    ) -> None:
        """Test every artifact is written."""
        out = tmp_path / "results"
        paths = save_results(result, out)

        assert set(paths) == {
            "clean",
            "city_daily",
            "national_daily",
            "yearly",
            "missingness_by_city",
            "trends",
            "summary",
        }
        assert all(path.exists() for path in paths.values())

        yearly = pd.read_csv(paths["yearly"])
        assert yearly["year"].tolist() == [2000, 2001]

        clean = pd.read_csv(paths["clean"])
        assert clean["date"].iloc[0] == "2000-01-01"

        summary = json.loads(paths["summary"].read_text(encoding="utf-8"))
        assert summary["clean_rows"] == 4
