"""End-to-end tests for the cleaning pipeline."""

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from layoffs.config import CleaningConfig, PipelineConfig
from layoffs.etl import CleaningPipeline, clean_frame, run_cleaning, write_canonical
from layoffs.ingestion import load_canonical_layoffs, read_raw_layoffs

RawFactory = Callable[..., pd.DataFrame]


class TestCleanFrame:
    """Tests for the in-memory pipeline on the sample extract."""

    @pytest.fixture
    def result(self, sample_csv: Path):
        """Clean the sample extract."""
        return clean_frame(read_raw_layoffs(sample_csv))

    def test_counts(self, result) -> None:
        """Test the stage counts for the sample extract."""
        assert result.n_raw == 14
        assert result.n_duplicates == 1
        assert result.n_backfilled == 1
        assert result.n_unparseable_dates == 1
        assert result.n_dropped_unmeasured == 1
        assert result.n_canonical == 12

    def test_values_normalized(self, result) -> None:
        """Test that each kind of defect in the sample is fixed."""
        canonical = result.canonical
        df = canonical[canonical["company"] != "Airbnb"].set_index("company")

        assert "Included Health" in df.index
        assert df.loc["Included Health", "country"] == "United States"
        assert df.loc["Coinbase", "industry"] == "Crypto"
        assert df.loc["BitMEX", "industry"] == "Crypto"
        assert pd.isna(df.loc["Juul", "industry"])
        assert pd.isna(df.loc["Alerzo", "percentage_laid_off"])
        assert pd.isna(df.loc["Blackbaud", "date"])
        assert pd.isna(df.loc["Blackbaud", "funds_raised_millions"])
        assert pd.isna(df.loc["Bally's Interactive", "date"])
        assert df.loc["Atlassian", "date"] == pd.Timestamp("2023-03-06")
        assert "Ghost" not in df.index

    def test_backfill_from_sibling(self, result) -> None:
        """Test that the Airbnb record without industry got 'Travel'."""
        airbnb = result.canonical[result.canonical["company"] == "Airbnb"]
        assert airbnb["industry"].tolist() == ["Travel", "Travel"]

    def test_scan_order_kept(self, result) -> None:
        """Test that surviving records keep their source order."""
        assert result.canonical["company"].tolist()[:4] == [
            "Atlassian",
            "SiriusXM",
            "Alerzo",
            "Included Health",
        ]

    def test_input_untouched(self, sample_csv: Path) -> None:
        """Test that the raw frame is not mutated."""
        raw = read_raw_layoffs(sample_csv)
        before = raw.copy()
        clean_frame(raw)
        pd.testing.assert_frame_equal(raw, before)

    def test_deterministic(self, sample_csv: Path) -> None:
        """Test that two runs produce the same fingerprint."""
        first = clean_frame(read_raw_layoffs(sample_csv))
        second = clean_frame(read_raw_layoffs(sample_csv))
        assert first.output_fingerprint == second.output_fingerprint
        assert first.input_fingerprint == second.input_fingerprint
        assert first.config_fingerprint == second.config_fingerprint

    def test_config_fingerprint(self, sample_csv: Path) -> None:
        """Test that different cleaning rules give a different fingerprint."""
        raw = read_raw_layoffs(sample_csv)
        default = clean_frame(raw)
        custom = clean_frame(raw, CleaningConfig(text_sentinel="n/a"))
        assert len(default.config_fingerprint) == 12
        assert default.config_fingerprint != custom.config_fingerprint

    def test_empty_extract(self, raw_frame: RawFactory) -> None:
        """Test that an empty extract yields an empty canonical table."""
        result = clean_frame(raw_frame().iloc[0:0])
        assert result.n_canonical == 0
        assert result.n_duplicates == 0

    def test_unusual_percentage_kept(self, raw_frame: RawFactory) -> None:
        """Test that a record whose only measure is an odd percentage survives."""
        result = clean_frame(
            raw_frame({"company": "Acme", "total_laid_off": "none", "percentage_laid_off": "50%"})
        )
        assert result.n_canonical == 1
        assert result.n_dropped_unmeasured == 0
        assert result.canonical.loc[0, "percentage_laid_off"] == "50%"

    def test_sentinel_dates_not_unparseable(self, raw_frame: RawFactory) -> None:
        """Test that 'none' in any casing is a missing date, not a parse failure."""
        result = clean_frame(
            raw_frame({"company": "Acme", "date": "none"}, {"company": "Beta", "date": "NONE"})
        )
        assert result.n_unparseable_dates == 0
        assert result.canonical["date"].isna().all()


class TestCleaningPipeline:
    """Tests for the file-based pipeline."""

    def test_run_writes_canonical(self, pipeline_config: PipelineConfig) -> None:
        """Test that the canonical CSV is written and reads back equal."""
        output = pipeline_config.canonical_path
        result = run_cleaning(pipeline_config, output_path=output)

        assert result.output_path == output
        assert output.exists()

        reread = load_canonical_layoffs(pipeline_config)
        pd.testing.assert_frame_equal(reread, result.canonical)

    def test_run_without_output(self, pipeline_config: PipelineConfig) -> None:
        """Test that nothing is written without an output path."""
        result = CleaningPipeline(pipeline_config).run()
        assert result.output_path is None
        assert not pipeline_config.canonical_path.exists()

    def test_missing_source_aborts(self, pipeline_config: PipelineConfig) -> None:
        """Test that a missing extract is fatal and writes nothing."""
        pipeline_config.raw_path.unlink()
        with pytest.raises(FileNotFoundError):
            run_cleaning(pipeline_config, output_path=pipeline_config.canonical_path)
        assert not pipeline_config.canonical_path.exists()

    def test_iso_dates_written(self, pipeline_config: PipelineConfig, tmp_path: Path) -> None:
        """Test that dates are written as ISO dates."""
        result = run_cleaning(pipeline_config)
        path = write_canonical(result.canonical, tmp_path / "out" / "clean.csv")
        text = path.read_text()
        assert "2023-03-06" in text
        assert "3/6/2023" not in text
