"""Command-line interface for the layoffs cleaning pipeline."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="layoffs",
    help="Cleaning and exploration pipeline for the tech layoffs dataset.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]

InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Canonical CSV to read. Defaults to output/{project}/layoffs_clean.csv.",
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines on stderr."),
    ] = False,
) -> None:
    """Configure logging for every command."""
    from layoffs.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


@app.command()
def clean(
    config: ConfigOption,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the canonical CSV.",
        ),
    ] = None,
) -> None:
    """Run the cleaning pipeline and write the canonical table."""
    from layoffs.config.loader import load_config
    from layoffs.etl import run_cleaning

    console.print(f"[blue]Loading configuration from {config}[/blue]")
    pipeline_config = load_config(config)

    if output is None:
        output = pipeline_config.canonical_path

    console.print(f"[blue]Cleaning {pipeline_config.raw_path}[/blue]")
    console.print(f"[dim]Output: {output}[/dim]")

    try:
        result = run_cleaning(pipeline_config, output_path=output)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]Cleaning failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print()
    table = Table(title="Cleaning Pipeline Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Raw records", str(result.n_raw))
    table.add_row("Duplicates removed", str(result.n_duplicates))
    table.add_row("Industries backfilled", str(result.n_backfilled))
    table.add_row("Unparseable dates cleared", str(result.n_unparseable_dates))
    table.add_row("Records without measures dropped", str(result.n_dropped_unmeasured))
    table.add_row("Canonical records", str(result.n_canonical))
    table.add_row("Fingerprint", result.output_fingerprint)
    table.add_row("Cleaning rules", result.config_fingerprint)
    console.print(table)

    changed = {name: n for name, n in result.pass_changes.items() if n}
    if changed:
        console.print("\n[blue]Cells changed per pass:[/blue]")
        for name, n in changed.items():
            console.print(f"  {name}: {n}")

    if result.output_path:
        console.print(f"\n[green]Saved to: {result.output_path}[/green]")


@app.command()
def duplicates(
    config: ConfigOption,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum duplicate rows to show."),
    ] = 20,
) -> None:
    """Preview the raw records that deduplication would remove."""
    from layoffs.config.loader import load_config
    from layoffs.deduplication import find_duplicates
    from layoffs.ingestion import load_raw_layoffs
    from layoffs.reporting import ReportReporter

    pipeline_config = load_config(config)

    try:
        raw = load_raw_layoffs(pipeline_config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    dupes = find_duplicates(raw)
    if dupes.empty:
        console.print(f"[green]No exact duplicates among {len(raw)} records[/green]")
        return

    reporter = ReportReporter(console, limit=limit)
    reporter.print_frame(dupes, f"Duplicate Records ({len(dupes)} of {len(raw)})")


@app.command()
def validate(config: ConfigOption, input_path: InputOption = None) -> None:
    """Validate the raw extract and the canonical table against their schemas."""
    from layoffs.config.loader import load_config
    from layoffs.validation import ConsoleReporter, ValidationRunner

    console.print("[blue]Running schema validation...[/blue]")

    pipeline_config = load_config(config)

    runner = ValidationRunner(pipeline_config, canonical_path=input_path)
    results = runner.run()

    reporter = ConsoleReporter(console)
    reporter.print_results(results)

    if any(r.schema_valid is False for r in results):
        raise typer.Exit(code=1)


@app.command()
def audit(config: ConfigOption, input_path: InputOption = None) -> None:
    """
    Audit a canonical table for leftover defects.

    Checks for duplicates, sentinel text, spelling variants of industry and
    country, records without measures and out-of-range percentages.
    """
    from layoffs.assessment import AuditReporter, CheckStatus, audit_canonical
    from layoffs.config.loader import load_config

    console.print("[blue]Auditing canonical table...[/blue]")

    pipeline_config = load_config(config)
    result = audit_canonical(pipeline_config, input_path)

    AuditReporter(console).print_results(result)

    if result.overall_status == CheckStatus.FAIL:
        console.print(
            f"[yellow]Re-run cleaning: layoffs clean --config {config}[/yellow]"
        )
        raise typer.Exit(code=1)


@app.command()
def report(
    config: ConfigOption,
    input_path: InputOption = None,
    kind: Annotated[
        list[str] | None,
        typer.Option(
            "--kind",
            "-k",
            help="Report section(s): overview, company, country, stage, industry, "
            "year, monthly, ranking, shutdowns. Repeat for several.",
        ),
    ] = None,
    html: Annotated[
        bool,
        typer.Option("--html", help="Also write the HTML report."),
    ] = False,
    html_output: Annotated[
        Path | None,
        typer.Option(
            "--html-output",
            help="Path of the HTML report. Defaults to a timestamped file in reports/.",
        ),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum rows per table."),
    ] = 20,
) -> None:
    """Print exploratory reports over the canonical table."""
    from pandera.errors import SchemaError, SchemaErrors

    from layoffs.config.loader import load_config
    from layoffs.ingestion import load_canonical_layoffs
    from layoffs.reporting import ReportReporter, build_report, generate_html_report

    pipeline_config = load_config(config)

    try:
        canonical = load_canonical_layoffs(pipeline_config, input_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print(f"[yellow]Run cleaning first: layoffs clean --config {config}[/yellow]")
        raise typer.Exit(code=1) from e
    except (SchemaError, SchemaErrors, ValueError) as e:
        console.print(f"[red]Canonical table is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e

    exploration = build_report(canonical, top_n=pipeline_config.reporting.top_n)

    reporter = ReportReporter(console, limit=limit)
    try:
        reporter.print_report(exploration, kinds=kind)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    if html:
        path = generate_html_report(
            exploration,
            html_output or pipeline_config.report_path(),
            project=pipeline_config.project,
            plots=pipeline_config.reporting.plots,
        )
        console.print(f"[green]HTML report saved to: {path}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from layoffs import __version__

    console.print(f"layoffs version {__version__}")


if __name__ == "__main__":
    app()
