"""
Exploratory aggregates over the canonical layoffs table.

Every function here is read-only: it takes the canonical table and
returns a new summary frame.
"""

from dataclasses import dataclass

import pandas as pd

from layoffs.reporting.ranking import dense_rank
from layoffs.schemas.layoffs import CompanyYearRankSchema
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

MEASURE = "total_laid_off"
GROUPABLE_COLUMNS: tuple[str, ...] = ("company", "location", "industry", "stage", "country")


def _sum_measure(grouped: "pd.core.groupby.SeriesGroupBy") -> pd.Series:
    """Sum headcounts; groups with no headcount at all stay missing."""
    return grouped.sum(min_count=1).astype("Int64")


def _sort_desc(df: pd.DataFrame, column: str = MEASURE) -> pd.DataFrame:
    """Largest first, missing last, ties kept in first-seen order."""
    return df.sort_values(
        column, ascending=False, na_position="last", kind="stable"
    ).reset_index(drop=True)


def add_period_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add 'year' (Int64) and 'month' ('YYYY-MM' text) derived from the date.

    Args:
        df: Canonical table.

    Returns:
        Copy with period columns; both are missing where the date is.
    """
    df = df.copy()
    dates = pd.to_datetime(df["date"])
    df["year"] = dates.dt.year.astype("Int64")
    df["month"] = dates.dt.strftime("%Y-%m").astype("string")
    return df


def totals_by(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Total headcount laid off per value of a categorical column.

    Args:
        df: Canonical table.
        column: One of company, location, industry, stage, country.

    Returns:
        Frame [column, total_laid_off], largest total first.
    """
    if column not in GROUPABLE_COLUMNS:
        msg = f"Cannot group by {column!r}. Choose from: {', '.join(GROUPABLE_COLUMNS)}"
        raise ValueError(msg)

    totals = _sum_measure(df.groupby(column, dropna=False, sort=False)[MEASURE])
    return _sort_desc(totals.reset_index())


def totals_by_year(df: pd.DataFrame) -> pd.DataFrame:
    """
    Total headcount per calendar year, latest year first.

    Records without a date are grouped under a missing year, listed last.
    """
    periods = add_period_columns(df)
    totals = _sum_measure(periods.groupby("year", dropna=False, sort=False)[MEASURE])
    return (
        totals.reset_index()
        .sort_values("year", ascending=False, na_position="last", kind="stable")
        .reset_index(drop=True)
    )


def totals_by_month(df: pd.DataFrame) -> pd.DataFrame:
    """
    Total headcount per month ('YYYY-MM'), in chronological order.

    Records without a date are excluded.
    """
    periods = add_period_columns(df)
    periods = periods[periods["month"].notna()]
    totals = _sum_measure(periods.groupby("month", sort=True)[MEASURE])
    return totals.reset_index()


def rolling_monthly_totals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Monthly totals with a running cumulative total.

    Returns:
        Frame [month, total_laid_off, rolling_total] in chronological order.
    """
    monthly = totals_by_month(df)
    monthly["rolling_total"] = monthly[MEASURE].fillna(0).cumsum().astype("Int64")
    return monthly


def company_year_totals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Total headcount per (company, year), largest first.

    Returns:
        Frame [company, year, total_laid_off].
    """
    periods = add_period_columns(df)
    totals = _sum_measure(
        periods.groupby(["company", "year"], dropna=False, sort=False)[MEASURE]
    )
    return _sort_desc(totals.reset_index())


def top_companies_per_year(df: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    """
    Companies ranked by headcount laid off within each year.

    Uses a dense rank, so tied companies share a rank and a year can list
    more than n companies. Records without a date are excluded.

    Args:
        df: Canonical table.
        n: Highest rank to keep.

    Returns:
        Frame [company, year, total_laid_off, ranking], by year then rank.
    """
    if n < 1:
        msg = f"n must be at least 1, got {n}"
        raise ValueError(msg)

    totals = company_year_totals(df)
    totals = totals[totals["year"].notna()]
    ranked = dense_rank(totals, partition_by="year", order_by=MEASURE)
    top = ranked[ranked["ranking"] <= n]
    top = top.sort_values(["year", "ranking"], kind="stable").reset_index(drop=True)
    return CompanyYearRankSchema.validate(top)


def measure_maxima(df: pd.DataFrame) -> dict[str, float | int | None]:
    """
    Largest headcount and largest percentage laid off.

    Returns:
        Mapping with 'max_total_laid_off' and 'max_percentage_laid_off'.
    """
    total = df[MEASURE].max()
    percentage = pd.to_numeric(df["percentage_laid_off"], errors="coerce").max()
    return {
        "max_total_laid_off": None if pd.isna(total) else int(total),
        "max_percentage_laid_off": None if pd.isna(percentage) else float(percentage),
    }


def date_range(df: pd.DataFrame) -> tuple[pd.Timestamp | None, pd.Timestamp | None]:
    """Earliest and latest event date, or None when no record has a date."""
    dates = pd.to_datetime(df["date"]).dropna()
    if dates.empty:
        return None, None
    return dates.min(), dates.max()


def full_shutdowns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Records where the whole company was laid off (percentage of 1).

    Returns:
        Matching records, best funded first.
    """
    percentage = pd.to_numeric(df["percentage_laid_off"], errors="coerce")
    shutdowns = df[(percentage == 1).fillna(False).astype(bool)]
    return _sort_desc(shutdowns, "funds_raised_millions")


@dataclass
class ExplorationReport:
    """All exploratory summaries of one canonical table."""

    n_records: int
    maxima: dict[str, float | int | None]
    earliest: pd.Timestamp | None
    latest: pd.Timestamp | None
    by_company: pd.DataFrame
    by_country: pd.DataFrame
    by_stage: pd.DataFrame
    by_industry: pd.DataFrame
    by_year: pd.DataFrame
    rolling_monthly: pd.DataFrame
    top_companies: pd.DataFrame
    shutdowns: pd.DataFrame


def build_report(df: pd.DataFrame, top_n: int = 5) -> ExplorationReport:
    """
    Compute every exploratory summary.

    Args:
        df: Canonical table.
        top_n: Highest rank kept in the per-year company ranking.

    Returns:
        ExplorationReport.
    """
    earliest, latest = date_range(df)
    report = ExplorationReport(
        n_records=len(df),
        maxima=measure_maxima(df),
        earliest=earliest,
        latest=latest,
        by_company=totals_by(df, "company"),
        by_country=totals_by(df, "country"),
        by_stage=totals_by(df, "stage"),
        by_industry=totals_by(df, "industry"),
        by_year=totals_by_year(df),
        rolling_monthly=rolling_monthly_totals(df),
        top_companies=top_companies_per_year(df, top_n),
        shutdowns=full_shutdowns(df),
    )
    log.info("Built exploration report", records=report.n_records, top_n=top_n)
    return report
