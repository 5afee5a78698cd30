"""Tests for the normalization passes."""

from collections.abc import Callable

import pandas as pd
import pytest

from layoffs.config import CleaningConfig
from layoffs.normalization import (
    NORMALIZATION_PASSES,
    backfill_industry,
    build_industry_index,
    canonicalize_country,
    canonicalize_industry,
    clear_sentinels,
    coerce_measures,
    find_unparseable_dates,
    normalize,
    parse_dates,
    replace_measure_sentinels,
    trim_text,
)
from layoffs.normalization.temporal import PASS_COUNTS_ATTR

RawFactory = Callable[..., pd.DataFrame]


@pytest.fixture
def cleaning() -> CleaningConfig:
    """Default cleaning rules."""
    return CleaningConfig()


class TestMeasureSentinels:
    """Tests for the exact measure sentinel pass."""

    def test_exact_match_cleared(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that 'none' in the measures becomes missing."""
        df = raw_frame({"total_laid_off": "none", "percentage_laid_off": "none"})
        result = replace_measure_sentinels(df, cleaning)
        assert pd.isna(result.loc[0, "total_laid_off"])
        assert pd.isna(result.loc[0, "percentage_laid_off"])
        assert result.loc[0, "funds_raised_millions"] == "50"

    def test_case_sensitive(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that other casings are left to the later sweep."""
        df = raw_frame({"total_laid_off": "None"})
        assert replace_measure_sentinels(df, cleaning).loc[0, "total_laid_off"] == "None"

    def test_text_columns_untouched(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that only the measures are affected."""
        df = raw_frame({"industry": "none"})
        assert replace_measure_sentinels(df, cleaning).loc[0, "industry"] == "none"


class TestCoerceMeasures:
    """Tests for typing the measures."""

    def test_counts_typed(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that counts become nullable integers."""
        df = raw_frame({"total_laid_off": "1,200", "funds_raised_millions": ""})
        result = coerce_measures(df, cleaning)

        assert result["total_laid_off"].dtype == "Int64"
        assert result.loc[0, "total_laid_off"] == 1200
        assert pd.isna(result.loc[0, "funds_raised_millions"])

    def test_unreadable_counts_missing(
        self, raw_frame: RawFactory, cleaning: CleaningConfig
    ) -> None:
        """Test that text, fractions and negatives become missing."""
        df = raw_frame(
            {"total_laid_off": "many"},
            {"total_laid_off": "2.5"},
            {"total_laid_off": "-3"},
            {"total_laid_off": "40"},
        )
        result = coerce_measures(df, cleaning)
        assert result["total_laid_off"].isna().tolist() == [True, True, True, False]

    def test_percentage_stays_text(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that percentages are trimmed but not converted."""
        df = raw_frame({"percentage_laid_off": " 0.25 "}, {"percentage_laid_off": ""})
        result = coerce_measures(df, cleaning)
        assert result.loc[0, "percentage_laid_off"] == "0.25"
        assert pd.isna(result.loc[1, "percentage_laid_off"])


class TestTextPasses:
    """Tests for trimming and canonical labels."""

    def test_trim_company(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that company names lose surrounding whitespace."""
        df = raw_frame({"company": " E Inc. ", "location": " NYC "})
        result = trim_text(df, cleaning)
        assert result.loc[0, "company"] == "E Inc."
        assert result.loc[0, "location"] == " NYC "

    def test_crypto_variants(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that industries starting with 'Crypto' collapse to 'Crypto'."""
        df = raw_frame(
            {"industry": "Crypto Currency"},
            {"industry": "CryptoCurrency"},
            {"industry": "Crypto"},
            {"industry": "crypto"},
            {"industry": None},
        )
        result = canonicalize_industry(df, cleaning)
        assert result["industry"].tolist()[:4] == ["Crypto", "Crypto", "Crypto", "crypto"]
        assert pd.isna(result.loc[4, "industry"])

    def test_united_states_periods(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that trailing periods are stripped from United States only."""
        df = raw_frame(
            {"country": "United States."},
            {"country": "United States.."},
            {"country": "United States"},
            {"country": "U.S."},
            {"country": "Canada."},
        )
        result = canonicalize_country(df, cleaning)
        assert result["country"].tolist() == [
            "United States",
            "United States",
            "United States",
            "U.S.",
            "Canada.",
        ]


class TestParseDates:
    """Tests for date parsing."""

    def test_month_day_year(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that 01/05/2023 is the 5th of January."""
        df = raw_frame({"date": "01/05/2023"}, {"date": "3/6/2023"})
        result = parse_dates(df, cleaning)

        assert result.loc[0, "date"] == pd.Timestamp("2023-01-05")
        assert result.loc[1, "date"] == pd.Timestamp("2023-03-06")
        assert pd.api.types.is_datetime64_any_dtype(result["date"])

    def test_sentinel_and_garbage(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that 'None' and unparseable text become missing."""
        df = raw_frame({"date": "None"}, {"date": "2023-13-45"}, {"date": ""})
        result = parse_dates(df, cleaning)
        assert result["date"].isna().all()

    def test_find_unparseable(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that only real parse failures are reported."""
        df = raw_frame({"date": "None"}, {"date": "yesterday"}, {"date": "1/5/2023"})
        bad = find_unparseable_dates(df["date"], cleaning)
        assert bad.tolist() == ["yesterday"]

    def test_sentinel_any_casing(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that 'none' in any casing is missing but not a parse failure."""
        df = raw_frame({"date": "none"}, {"date": "NONE"}, {"date": "yesterday"})
        assert find_unparseable_dates(df["date"], cleaning).tolist() == ["yesterday"]

        result = parse_dates(df, cleaning)
        assert result["date"].isna().all()
        assert result.attrs[PASS_COUNTS_ATTR] == {"unparseable_dates": 1}

    def test_already_typed(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that a typed column is left alone."""
        df = parse_dates(raw_frame({}), cleaning)
        again = parse_dates(df, cleaning)
        pd.testing.assert_frame_equal(df, again)


class TestClearSentinels:
    """Tests for the case-insensitive sentinel sweep."""

    def test_any_casing_any_column(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that 'none', 'None' and 'NONE' all become missing."""
        df = raw_frame({"industry": "none", "stage": "None", "location": "NONE"})
        result = clear_sentinels(df, cleaning)
        assert result.loc[0, ["industry", "stage", "location"]].isna().all()
        assert result.loc[0, "company"] == "Acme"

    def test_substrings_kept(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that words containing 'none' are not touched."""
        df = raw_frame({"company": "Nonexistent"})
        assert clear_sentinels(df, cleaning).loc[0, "company"] == "Nonexistent"


class TestBackfillIndustry:
    """Tests for industry backfill."""

    def test_fills_from_same_company_and_location(
        self, raw_frame: RawFactory, cleaning: CleaningConfig
    ) -> None:
        """Test that Beta in NY borrows Fintech from its sibling."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": None},
            {"company": "Beta", "location": "NY", "industry": "Fintech"},
        )
        result = backfill_industry(df, cleaning)
        assert result["industry"].tolist() == ["Fintech", "Fintech"]

    def test_blank_counts_as_missing(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that an empty industry is filled too."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": ""},
            {"company": "Beta", "location": "NY", "industry": "Fintech"},
        )
        assert backfill_industry(df, cleaning).loc[0, "industry"] == "Fintech"

    def test_location_must_match(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that a sibling in another city is not a donor."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": None},
            {"company": "Beta", "location": "LA", "industry": "Fintech"},
        )
        assert pd.isna(backfill_industry(df, cleaning).loc[0, "industry"])

    def test_missing_key_never_matches(
        self, raw_frame: RawFactory, cleaning: CleaningConfig
    ) -> None:
        """Test that absent locations do not join with each other."""
        df = raw_frame(
            {"company": "Beta", "location": None, "industry": None},
            {"company": "Beta", "location": None, "industry": "Fintech"},
        )
        assert pd.isna(backfill_industry(df, cleaning).loc[0, "industry"])

    def test_first_donor_wins(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that conflicting donors resolve to the first in scan order."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": "Fintech"},
            {"company": "Beta", "location": "NY", "industry": None},
            {"company": "Beta", "location": "NY", "industry": "Finance"},
        )
        assert backfill_industry(df, cleaning).loc[1, "industry"] == "Fintech"

    def test_filled_records_do_not_donate(
        self, raw_frame: RawFactory, cleaning: CleaningConfig
    ) -> None:
        """Test that donors come from the snapshot, not from fresh fills."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": None},
            {"company": "Beta", "location": "NY", "industry": None},
        )
        assert backfill_industry(df, cleaning)["industry"].isna().all()

    def test_index_skips_blank_donors(self, raw_frame: RawFactory) -> None:
        """Test that blank industries are never offered as donors."""
        df = raw_frame(
            {"company": "Beta", "location": "NY", "industry": ""},
            {"company": "Gamma", "location": "NY", "industry": "Retail"},
        )
        index = build_industry_index(df, ["company", "location"])
        assert index["company"].tolist() == ["Gamma"]


class TestNormalize:
    """Tests for the ordered pass runner."""

    def test_pass_order(self) -> None:
        """Test that passes run in the documented order."""
        names = [name for name, _ in NORMALIZATION_PASSES]
        assert names.index("replace_measure_sentinels") < names.index("coerce_measures")
        assert names.index("parse_dates") < names.index("clear_sentinels")
        assert names[-1] == "backfill_industry"

    def test_full_run(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test a record touched by every pass."""
        df = raw_frame(
            {
                "company": " Beta ",
                "location": "NY",
                "industry": "none",
                "total_laid_off": "none",
                "percentage_laid_off": "0.2",
                "date": "None",
                "stage": "NONE",
                "country": "United States.",
            },
            {
                "company": "Beta",
                "location": "NY",
                "industry": "Crypto Currency",
                "date": "01/05/2023",
            },
        )
        result = normalize(df, cleaning)
        out = result.data

        assert out.loc[0, "company"] == "Beta"
        assert out.loc[0, "industry"] == "Crypto"
        assert pd.isna(out.loc[0, "total_laid_off"])
        assert pd.isna(out.loc[0, "date"])
        assert pd.isna(out.loc[0, "stage"])
        assert out.loc[0, "country"] == "United States"
        assert out.loc[1, "date"] == pd.Timestamp("2023-01-05")
        assert result.n_backfilled == 1
        assert result.n_unparseable_dates == 0

    def test_published_counts(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that counts reported by a pass reach the result, not the data."""
        df = raw_frame({"date": "NONE"}, {"date": "31/31/2023"}, {"date": "not a date"})
        result = normalize(df, cleaning)

        assert result.n_unparseable_dates == 2
        assert result.counts == {"unparseable_dates": 2}
        assert PASS_COUNTS_ATTR not in result.data.attrs

    def test_input_not_modified(self, raw_frame: RawFactory, cleaning: CleaningConfig) -> None:
        """Test that the working copy passed in is left as it was."""
        df = raw_frame({"company": " Beta ", "industry": "none"})
        before = df.copy()
        normalize(df, cleaning)
        pd.testing.assert_frame_equal(df, before)
