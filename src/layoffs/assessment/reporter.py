"""
Reporter for audit results.

Formats audit results for console output using Rich.
"""

from typing import ClassVar

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from layoffs.assessment.core import AuditResult, CheckResult, CheckStatus


class AuditReporter:
    """Prints audit checks, a summary panel and samples of failing rows."""

    STATUS_STYLES: ClassVar[dict[CheckStatus, tuple[str, str]]] = {
        CheckStatus.PASS: ("PASS", "green"),
        CheckStatus.WARN: ("WARN", "yellow"),
        CheckStatus.FAIL: ("FAIL", "red"),
        CheckStatus.SKIP: ("SKIP", "dim"),
    }

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_results(self, result: AuditResult, *, show_samples: bool = True) -> None:
        """
        Print the full audit.

        Args:
            result: Audit to display.
            show_samples: Whether to list failing rows of failed and warned checks.
        """
        _, overall_style = self.STATUS_STYLES[result.overall_status]

        self.console.print()
        self.console.print(
            Panel.fit(
                Text.assemble(
                    Text("Layoffs Audit", style="bold"),
                    "\n",
                    Text(f"Source: {result.source}", style="dim"),
                ),
                border_style=overall_style,
            )
        )

        self.console.print()
        self.console.print(self._checks_table(result))

        self.console.print()
        self._print_summary(result)

        flagged = [
            c for c in result.checks if c.status in (CheckStatus.FAIL, CheckStatus.WARN)
        ]
        if show_samples and flagged:
            self.console.print()
            for check in flagged:
                self._print_details(check)

    def _checks_table(self, result: AuditResult) -> Table:
        table = Table(title="Audit Checks", show_header=True, header_style="bold")
        table.add_column("Check", style="cyan", min_width=20)
        table.add_column("Status", justify="center")
        table.add_column("Result", min_width=36)
        table.add_column("Rows", justify="right")
        table.add_column("Failing", justify="right")

        for check in result.checks:
            label, style = self.STATUS_STYLES[check.status]
            table.add_row(
                check.name,
                Text(label, style=style),
                check.message,
                str(check.n_checked) if check.status != CheckStatus.SKIP else "-",
                str(check.n_failed) if check.n_failed else "-",
            )
        return table

    def _print_summary(self, result: AuditResult) -> None:
        label, style = self.STATUS_STYLES[result.overall_status]
        line = Text.assemble(
            ("Overall: ", "bold"),
            (label, style),
            "   ",
            (f"{result.n_passed} passed", "green"),
            ", ",
            (f"{result.n_failed} failed", "red" if result.n_failed else "dim"),
            ", ",
            (f"{result.n_warned} warned", "yellow" if result.n_warned else "dim"),
        )
        self.console.print(line)

    def _print_details(self, check: CheckResult) -> None:
        label, style = self.STATUS_STYLES[check.status]
        self.console.print(f"[{style}]{label}[/{style}] [cyan]{check.name}[/cyan]: {check.message}")
        if check.details:
            self.console.print(f"  [dim]{check.details}[/dim]")
        if check.sample_failures is not None and not check.sample_failures.empty:
            self.console.print(_sample_table(check.sample_failures))


def _sample_table(sample: pd.DataFrame) -> Table:
    """Borderless table of failing rows."""
    table = Table(show_header=True, header_style="bold dim", box=None, padding=(0, 1))
    for col in sample.columns:
        table.add_column(str(col), overflow="fold")
    for row in sample.itertuples(index=False):
        table.add_row(*["-" if pd.isna(v) else str(v) for v in row])
    return table
