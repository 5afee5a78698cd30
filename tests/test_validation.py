"""Tests for validation module."""

from pathlib import Path

from rich.console import Console

from layoffs.config import PipelineConfig
from layoffs.etl import run_cleaning
from layoffs.validation import ConsoleReporter, ValidationResult, ValidationRunner
from layoffs.validation.core import DATASET_SCHEMA_MAP


def by_name(results: list[ValidationResult]) -> dict[str, ValidationResult]:
    """Index results by dataset name."""
    return {r.dataset_name: r for r in results}


class TestValidationRunner:
    """Tests for ValidationRunner."""

    def test_dataset_map(self) -> None:
        """Test that both datasets have schemas."""
        assert DATASET_SCHEMA_MAP == {
            "raw_layoffs": "layoffs_raw",
            "canonical_layoffs": "layoffs_canonical",
        }

    def test_before_cleaning(self, pipeline_config: PipelineConfig) -> None:
        """Test that the raw extract passes and the missing output is reported."""
        results = by_name(ValidationRunner(pipeline_config).run())

        raw = results["raw_layoffs"]
        assert raw.exists
        assert raw.schema_valid is True
        assert raw.row_count == 14

        canonical = results["canonical_layoffs"]
        assert not canonical.exists
        assert canonical.schema_valid is None
        assert canonical.error_message == "File not found"

    def test_after_cleaning(self, pipeline_config: PipelineConfig) -> None:
        """Test that the written canonical table passes."""
        run_cleaning(pipeline_config, output_path=pipeline_config.canonical_path)
        results = by_name(ValidationRunner(pipeline_config).run())

        assert results["canonical_layoffs"].schema_valid is True
        assert results["canonical_layoffs"].row_count == 12

    def test_invalid_canonical(self, pipeline_config: PipelineConfig, tmp_path: Path) -> None:
        """Test that a broken canonical table fails with a readable message."""
        path = tmp_path / "broken.csv"
        path.write_text(
            "company,location,industry,total_laid_off,percentage_laid_off,date,stage,"
            "country,funds_raised_millions\n"
            "Acme,NYC,Retail,,,2023-01-05,Seed,United States,10\n"
            "Beta,NYC,Retail,-4,0.5,2023-01-05,Seed,United States,10\n"
        )
        results = by_name(ValidationRunner(pipeline_config, canonical_path=path).run())

        canonical = results["canonical_layoffs"]
        assert canonical.schema_valid is False
        assert canonical.error_message is not None
        assert "validation error" in canonical.error_message

    def test_unreadable_raw(self, pipeline_config: PipelineConfig) -> None:
        """Test that a raw file missing columns fails instead of raising."""
        pipeline_config.raw_path.write_text("company\nAcme\n")
        results = by_name(ValidationRunner(pipeline_config).run())

        raw = results["raw_layoffs"]
        assert raw.schema_valid is False
        assert raw.error_message is not None
        assert raw.error_message.startswith("ValueError")


class TestConsoleReporter:
    """Tests for validation console output."""

    def test_print_results(self, pipeline_config: PipelineConfig) -> None:
        """Test that the table and summary are printed."""
        console = Console(record=True, width=160)
        ConsoleReporter(console).print_results(ValidationRunner(pipeline_config).run())
        text = console.export_text()

        assert "Schema Validation Results" in text
        assert "raw_layoffs" in text
        assert "1 passed" in text
