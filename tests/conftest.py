"""Pytest configuration and shared fixtures."""

from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

from auclimate.config.settings import OutputConfig, ReportPipelineConfig, SourcesConfig

matplotlib.use("Agg")


@pytest.fixture
def raw_rainfall() -> pd.DataFrame:
    """
    Raw rainfall rows.

    Sydney 2000-01-03 is a three-day accumulation and Brisbane has no
    temperature counterpart.
    """
    return pd.DataFrame(
        {
            "station_code": ["066062"] * 3 + ["009151"] * 3 + ["040913"],
            "city_name": ["Sydney"] * 3 + ["Perth"] * 3 + ["Brisbane"],
            "year": [2000, 2000, 2000, 2000, 2000, 2001, 2000],
            "month": [1, 1, 1, 1, 1, 6, 1],
            "day": [1, 2, 3, 1, 2, 15, 1],
            "rainfall": [5.0, np.nan, 12.0, 0.0, 1.5, 3.0, 4.0],
            "period": [1.0, np.nan, 3.0, 1.0, np.nan, 1.0, 1.0],
            "quality": ["Y", None, "Y", "Y", "Y", "Y", "N"],
        }
    )


@pytest.fixture
def raw_temperature() -> pd.DataFrame:
    """Raw temperature rows with separate max and min readings."""
    return pd.DataFrame(
        {
            "city_name": [
                "SYDNEY",
                "SYDNEY",
                "SYDNEY",
                "PERTH",
                "PERTH",
                "PERTH",
                "PERTH",
                "MELBOURNE",
            ],
            "date": [
                "2000-01-01",
                "2000-01-02",
                "2000-01-03",
                "2000-01-01",
                "2000-01-01",
                "2000-01-02",
                "2001-06-15",
                "2000-01-01",
            ],
            "temperature": [20.0, 21.0, 22.0, 30.0, 18.0, np.nan, 15.0, 25.0],
            "temp_type": ["max", "max", "max", "max", "min", "max", "max", "max"],
            "site_name": ["SYDNEY"] * 3 + ["PERTH"] * 4 + ["MELBOURNE"],
        }
    )


@pytest.fixture
def rainfall_csv(tmp_path: Path, raw_rainfall: pd.DataFrame) -> Path:
    """Raw rainfall written to a CSV file."""
    path = tmp_path / "rainfall.csv"
    raw_rainfall.to_csv(path, index=False)
    return path


@pytest.fixture
def temperature_csv(tmp_path: Path, raw_temperature: pd.DataFrame) -> Path:
    """Raw temperature written to a CSV file."""
    path = tmp_path / "temperature.csv"
    raw_temperature.to_csv(path, index=False)
    return path


@pytest.fixture
def local_config(
    tmp_path: Path, rainfall_csv: Path, temperature_csv: Path
) -> ReportPipelineConfig:
    """Configuration reading the fixture CSVs and writing under tmp_path."""
    return ReportPipelineConfig(
        project="test-project",
        sources=SourcesConfig(
            rainfall=str(rainfall_csv),
            temperature=str(temperature_csv),
        ),
        output=OutputConfig(output_root=tmp_path / "output"),
    )


@pytest.fixture
def joined_table() -> pd.DataFrame:
    """Joined, column-pruned table of the fixture sources."""
    return pd.DataFrame(
        {
            "city": ["sydney", "sydney", "perth", "perth", "perth", "perth"],
            "date": pd.to_datetime(
                [
                    "2000-01-01",
                    "2000-01-02",
                    "2000-01-01",
                    "2000-01-01",
                    "2000-01-02",
                    "2001-06-15",
                ]
            ),
            "rainfall": [5.0, np.nan, 0.0, 0.0, 1.5, 3.0],
            "temperature": [20.0, 21.0, 30.0, 18.0, np.nan, 15.0],
        }
    )


@pytest.fixture
def clean_table(joined_table: pd.DataFrame) -> pd.DataFrame:
    """NA-free version of joined_table."""
    return joined_table.dropna().reset_index(drop=True)


@pytest.fixture
def linear_yearly() -> pd.DataFrame:
    """Yearly aggregates with exact linear trends and no noise."""
    years = np.arange(1900, 1951)
    offset = years - 1900
    return pd.DataFrame(
        {
            "year": years,
            "mean_rainfall": 100.0 - 0.5 * offset,
            "sd_rainfall": 10.0 + 0.1 * offset,
            "mean_temperature": 15.0 + 0.02 * offset,
            "sd_temperature": 5.0 - 0.01 * offset,
            "n_observations": np.full(len(years), 365),
        }
    )
