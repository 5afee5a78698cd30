"""Pytest configuration and shared fixtures."""

import shutil
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
import structlog

from layoffs.config import LAYOFF_COLUMNS, PipelineConfig, load_config

RawFactory = Callable[..., pd.DataFrame]


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Drop logging configuration made during a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_data_dir(project_root: Path) -> Path:
    """Return the test data directory."""
    return project_root / "tests" / "data"


@pytest.fixture
def sample_csv(test_data_dir: Path) -> Path:
    """Path to the sample raw extract (14 records, one exact duplicate)."""
    return test_data_dir / "layoffs_sample.csv"


def make_record(**overrides: Any) -> dict[str, Any]:
    """A raw record with plausible text in every column."""
    record: dict[str, Any] = {
        "company": "Acme",
        "location": "SF Bay Area",
        "industry": "Retail",
        "total_laid_off": "100",
        "percentage_laid_off": "0.1",
        "date": "1/5/2023",
        "stage": "Series B",
        "country": "United States",
        "funds_raised_millions": "50",
    }
    record.update(overrides)
    return record


@pytest.fixture
def raw_frame() -> RawFactory:
    """Factory building raw, all-text frames from record overrides."""

    def _build(*records: dict[str, Any]) -> pd.DataFrame:
        rows = [make_record(**r) for r in records]
        return pd.DataFrame(rows, columns=list(LAYOFF_COLUMNS)).astype("string")

    return _build


@pytest.fixture
def base_config() -> dict[str, Any]:
    """Create a minimal configuration dictionary for testing."""
    return {
        "project": "test-layoffs",
        "data": {"raw_layoffs": "layoffs.csv"},
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_csv: Path) -> Path:
    """A config YAML pointing at a copy of the sample extract in tmp_path."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    shutil.copy(sample_csv, data_dir / "layoffs.csv")

    config_path = tmp_path / "layoffs.yaml"
    config_path.write_text(
        "project: test-layoffs\n"
        "data:\n"
        f"  root: {data_dir.as_posix()}\n"
        "  raw_layoffs: layoffs.csv\n"
        "reporting:\n"
        "  top_n: 5\n"
        "  plots: false\n"
        "output:\n"
        f"  root: {(tmp_path / 'output').as_posix()}\n",
        encoding="utf-8",
    )
    return config_path


@pytest.fixture
def pipeline_config(config_file: Path) -> PipelineConfig:
    """Loaded configuration for the sample extract."""
    return load_config(config_file)
