"""
Console reporter for validation results.

Formats validation results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from layoffs.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print validation results as a table, a summary and error details.

        Args:
            results: List of validation results to display.
        """
        table = Table(title="Schema Validation Results", show_header=True)
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("Schema", style="blue")
        table.add_column("Status", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("File", style="dim")

        for result in results:
            table.add_row(
                result.dataset_name,
                result.schema_name or "-",
                self._format_status(result),
                str(result.row_count) if result.row_count is not None else "-",
                str(result.file_path),
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_detailed_errors(results)

    @staticmethod
    def _format_status(result: ValidationResult) -> str:
        """Status cell with color markup."""
        if not result.exists:
            return "[yellow]Missing[/yellow]"
        if result.schema_valid is None:
            return "[yellow]Skipped[/yellow]"
        if result.schema_valid:
            return "[green]Pass[/green]"
        return "[red]Fail[/red]"

    def _print_summary(self, results: list[ValidationResult]) -> None:
        """Print pass/fail/skip counts."""
        passed = sum(1 for r in results if r.schema_valid is True)
        failed = sum(1 for r in results if r.schema_valid is False)
        skipped = sum(1 for r in results if r.schema_valid is None)

        self.console.print()
        self.console.print(
            f"[bold]Summary:[/bold] {len(results)} datasets, "
            f"[green]{passed} passed[/green], "
            f"[red]{failed} failed[/red], "
            f"[yellow]{skipped} skipped[/yellow]"
        )

    def _print_detailed_errors(self, results: list[ValidationResult]) -> None:
        """Print error messages for failed validations."""
        failed = [r for r in results if r.schema_valid is False]
        if not failed:
            return

        self.console.print()
        self.console.print("[bold red]Validation Errors:[/bold red]")

        for result in failed:
            self.console.print()
            self.console.print(
                f"[bold]{result.dataset_name}[/bold] (schema: {result.schema_name}):"
            )
            for line in (result.error_message or "").split("\n"):
                self.console.print(f"  {line}")
