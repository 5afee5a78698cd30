"""Tests for finalization of the cleaned collection."""

from collections.abc import Callable

import pandas as pd
import pandera.pandas as pa
import pytest

from layoffs.config import LAYOFF_COLUMNS, CleaningConfig
from layoffs.deduplication import ROW_NUMBER_COLUMN, remove_duplicates
from layoffs.normalization import normalize
from layoffs.validation import drop_bookkeeping, drop_unmeasured, finalize, to_canonical_types

RawFactory = Callable[..., pd.DataFrame]


def normalized(raw: pd.DataFrame) -> pd.DataFrame:
    """Run deduplication and normalization on a raw frame."""
    return normalize(remove_duplicates(raw).data, CleaningConfig()).data


class TestDropUnmeasured:
    """Tests for dropping records without measures."""

    def test_both_missing_dropped(self, raw_frame: RawFactory) -> None:
        """Test that only records lacking both measures go."""
        df = normalized(
            raw_frame(
                {"company": "A", "total_laid_off": "none", "percentage_laid_off": "none"},
                {"company": "B", "total_laid_off": "none"},
                {"company": "C", "percentage_laid_off": "none"},
                {"company": "D"},
            )
        )
        kept = drop_unmeasured(df)
        assert kept["company"].tolist() == ["B", "C", "D"]

    def test_funds_alone_is_not_a_measure(self, raw_frame: RawFactory) -> None:
        """Test that funds raised does not keep a record."""
        df = normalized(
            raw_frame(
                {
                    "total_laid_off": "none",
                    "percentage_laid_off": "none",
                    "funds_raised_millions": "900",
                }
            )
        )
        assert drop_unmeasured(df).empty


class TestCanonicalTypes:
    """Tests for column typing and bookkeeping removal."""

    def test_row_number_dropped(self, raw_frame: RawFactory) -> None:
        """Test that the transient row number is removed."""
        df = normalized(raw_frame({}))
        assert ROW_NUMBER_COLUMN in df.columns
        assert ROW_NUMBER_COLUMN not in drop_bookkeeping(df).columns

    def test_blank_text_becomes_missing(self, raw_frame: RawFactory) -> None:
        """Test that empty strings do not survive into the canonical table."""
        df = normalized(raw_frame({"stage": "", "company": "   "}))
        typed = to_canonical_types(drop_bookkeeping(df))
        assert pd.isna(typed.loc[0, "stage"])
        assert pd.isna(typed.loc[0, "company"])


class TestFinalize:
    """Tests for the canonical table contract."""

    def test_canonical_shape(self, raw_frame: RawFactory) -> None:
        """Test column order, dtypes and a fresh index."""
        df = normalized(
            raw_frame(
                {"company": "A", "total_laid_off": "none", "percentage_laid_off": "none"},
                {"company": "B"},
            )
        )
        canonical = finalize(df)

        assert list(canonical.columns) == list(LAYOFF_COLUMNS)
        assert canonical.index.tolist() == [0]
        assert canonical["total_laid_off"].dtype == "Int64"
        assert canonical["funds_raised_millions"].dtype == "Int64"
        assert pd.api.types.is_datetime64_any_dtype(canonical["date"])

    def test_schema_enforced(self, raw_frame: RawFactory) -> None:
        """Test that an invalid table is rejected when validating."""
        df = normalized(raw_frame({}))
        df["funds_raised_millions"] = pd.array([-5], dtype="Int64")
        with pytest.raises((pa.errors.SchemaError, pa.errors.SchemaErrors)):
            finalize(df)
        assert len(finalize(df, validate=False)) == 1
