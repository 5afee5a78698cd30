"""
Console reporter for exploration reports.

Formats summary tables using Rich.
"""

from typing import ClassVar

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from layoffs.reporting.aggregates import ExplorationReport


def _cell(value: object) -> str:
    """Render a cell, showing missing values as a dash."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return "-"
    if isinstance(value, pd.Timestamp):
        return value.strftime("%Y-%m-%d")
    return str(value)


class ReportReporter:
    """
    Formats and displays exploration reports.

    Uses Rich for formatted console output.
    """

    KINDS: ClassVar[tuple[str, ...]] = (
        "overview",
        "company",
        "country",
        "stage",
        "industry",
        "year",
        "monthly",
        "ranking",
        "shutdowns",
    )

    def __init__(self, console: Console | None = None, limit: int = 20) -> None:
        """
        Initialize reporter.

        Args:
            console: Rich console for output. Creates new if not provided.
            limit: Maximum rows printed per table.
        """
        self.console = console or Console()
        self.limit = limit

    def print_report(self, report: ExplorationReport, kinds: list[str] | None = None) -> None:
        """
        Print selected sections of a report.

        Args:
            report: ExplorationReport to display.
            kinds: Sections to print (defaults to all of KINDS).
        """
        sections = {
            "overview": lambda: self._print_overview(report),
            "company": lambda: self.print_frame(report.by_company, "Layoffs by Company"),
            "country": lambda: self.print_frame(report.by_country, "Layoffs by Country"),
            "stage": lambda: self.print_frame(report.by_stage, "Layoffs by Stage"),
            "industry": lambda: self.print_frame(report.by_industry, "Layoffs by Industry"),
            "year": lambda: self.print_frame(report.by_year, "Layoffs by Year"),
            "monthly": lambda: self.print_frame(
                report.rolling_monthly, "Monthly Layoffs (Rolling Total)", limit=None
            ),
            "ranking": lambda: self.print_frame(
                report.top_companies, "Top Companies per Year", limit=None
            ),
            "shutdowns": lambda: self.print_frame(
                report.shutdowns, "Full Shutdowns (100% Laid Off)"
            ),
        }

        for kind in kinds or list(self.KINDS):
            if kind not in sections:
                msg = f"Unknown report kind {kind!r}. Choose from: {', '.join(self.KINDS)}"
                raise ValueError(msg)
            sections[kind]()
            self.console.print()

    def _print_overview(self, report: ExplorationReport) -> None:
        """Print record count, date range and measure maxima."""
        summary = Table(show_header=False, box=None)
        summary.add_column("Label", style="bold")
        summary.add_column("Value")

        summary.add_row("Records:", str(report.n_records))
        summary.add_row("Earliest date:", _cell(report.earliest))
        summary.add_row("Latest date:", _cell(report.latest))
        summary.add_row("Max laid off:", _cell(report.maxima["max_total_laid_off"]))
        summary.add_row(
            "Max percentage:", _cell(report.maxima["max_percentage_laid_off"])
        )

        self.console.print(Panel(summary, title="Overview", border_style="blue"))

    def print_frame(
        self,
        df: pd.DataFrame,
        title: str,
        limit: int | None = -1,
    ) -> None:
        """
        Print a DataFrame as a Rich table.

        Args:
            df: Frame to print.
            title: Table title.
            limit: Row limit; -1 uses the reporter default, None prints all.
        """
        limit = self.limit if limit == -1 else limit
        shown = df if limit is None else df.head(limit)

        table = Table(title=title, show_header=True, header_style="bold")
        for col in df.columns:
            numeric = pd.api.types.is_numeric_dtype(df[col].dtype)
            table.add_column(str(col), justify="right" if numeric else "left")

        for row in shown.itertuples(index=False):
            table.add_row(*[_cell(v) for v in row])

        self.console.print(table)
        if len(shown) < len(df):
            self.console.print(f"[dim]Showing {len(shown)} of {len(df)} rows[/dim]")
