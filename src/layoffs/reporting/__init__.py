"""
Read-only exploratory reporting over the canonical layoffs table.

Provides aggregates, dense ranking, console tables and an HTML report.
"""

from layoffs.reporting.aggregates import (
    ExplorationReport,
    build_report,
    company_year_totals,
    date_range,
    full_shutdowns,
    measure_maxima,
    rolling_monthly_totals,
    top_companies_per_year,
    totals_by,
    totals_by_month,
    totals_by_year,
)
from layoffs.reporting.html import generate_html_report
from layoffs.reporting.ranking import dense_rank
from layoffs.reporting.reporter import ReportReporter

__all__ = [
    "ExplorationReport",
    "ReportReporter",
    "build_report",
    "company_year_totals",
    "date_range",
    "dense_rank",
    "full_shutdowns",
    "generate_html_report",
    "measure_maxima",
    "rolling_monthly_totals",
    "top_companies_per_year",
    "totals_by",
    "totals_by_month",
    "totals_by_year",
]
