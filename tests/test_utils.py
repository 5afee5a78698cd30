"""Tests for hashing and logging utilities."""

import json

import pandas as pd
import pytest

from layoffs.utils.hashing import hash_dataframe
from layoffs.utils.logging import configure_logging, get_logger, log_context


class TestHashDataframe:
    """Tests for DataFrame fingerprints."""

    def test_deterministic(self) -> None:
        """Test that equal frames hash equally regardless of index."""
        a = pd.DataFrame({"company": ["Acme", "Beta"], "n": [1, 2]})
        b = a.copy()
        b.index = [10, 11]
        assert hash_dataframe(a) == hash_dataframe(b)
        assert len(hash_dataframe(a)) == 16

    def test_order_matters(self) -> None:
        """Test that row order changes the fingerprint."""
        df = pd.DataFrame({"company": ["Acme", "Beta"]})
        assert hash_dataframe(df) != hash_dataframe(df.iloc[::-1])

    def test_column_subset(self) -> None:
        """Test hashing a subset of columns."""
        df = pd.DataFrame({"company": ["Acme"], "n": [1]})
        assert hash_dataframe(df, columns=["company"]) == hash_dataframe(df[["company"]])


class TestLogging:
    """Tests for structlog configuration."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that JSON logs carry bound context."""
        configure_logging(level="INFO", json_output=True, cache_loggers=False)

        with log_context(stage="dedup"):
            get_logger("test").info("duplicates_removed", n_removed=3)

        event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert event["event"] == "duplicates_removed"
        assert event["stage"] == "dedup"
        assert event["n_removed"] == 3
        assert event["level"] == "info"

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that events below the configured level are dropped."""
        configure_logging(level="ERROR", json_output=True, cache_loggers=False)
        get_logger("test").info("hidden")
        assert "hidden" not in capsys.readouterr().err
