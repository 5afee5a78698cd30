"""
HTML exploration report.

Renders the exploration report as a single self-contained HTML page with
summary tables and charts embedded as base64 PNG images.
"""

import base64
from datetime import datetime
from io import BytesIO
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from layoffs.reporting.aggregates import ExplorationReport
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

# Rows rendered per HTML table
TABLE_ROWS = 25


def _fig_to_base64(fig: Figure) -> str:
    """Convert matplotlib figure to base64 PNG string."""
    buf = BytesIO()
    fig.savefig(buf, format="png", dpi=120, bbox_inches="tight")
    buf.seek(0)
    return base64.b64encode(buf.read()).decode("utf-8")


def generate_rolling_total_plot(rolling_monthly: pd.DataFrame) -> str | None:
    """
    Plot monthly layoffs as bars with the running total as a line.

    Args:
        rolling_monthly: Output of rolling_monthly_totals().

    Returns:
        Base64 encoded PNG image, or None when there is nothing to plot.
    """
    if rolling_monthly.empty:
        return None

    months = rolling_monthly["month"].astype(str).tolist()
    monthly = rolling_monthly["total_laid_off"].astype("Float64").fillna(0).to_numpy(float)
    rolling = rolling_monthly["rolling_total"].astype("Float64").to_numpy(float)
    positions = np.arange(len(months))

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.bar(positions, monthly, color="steelblue", alpha=0.7, label="Monthly")
    ax.set_ylabel("Laid off per month")

    ax_total = ax.twinx()
    ax_total.plot(positions, rolling, color="darkred", linewidth=2, label="Rolling total")
    ax_total.set_ylabel("Rolling total")

    step = max(1, len(months) // 12)
    ax.set_xticks(positions[::step])
    ax.set_xticklabels(months[::step], rotation=45, ha="right", fontsize=9)
    ax.set_title("Layoffs per Month and Rolling Total", fontsize=12)
    ax.grid(axis="y", alpha=0.3)

    plt.tight_layout()
    result = _fig_to_base64(fig)
    plt.close(fig)
    return result


def generate_top_companies_plot(by_company: pd.DataFrame, top_n: int = 15) -> str | None:
    """
    Horizontal bar plot of the companies with the most layoffs.

    Args:
        by_company: Output of totals_by(df, "company").
        top_n: Number of companies shown.

    Returns:
        Base64 encoded PNG image, or None when there is nothing to plot.
    """
    present = by_company[by_company["total_laid_off"].notna()].head(top_n)
    if present.empty:
        return None

    names = present["company"].astype(str).tolist()[::-1]
    totals = present["total_laid_off"].astype("Float64").to_numpy(float)[::-1]

    fig, ax = plt.subplots(figsize=(10, max(4, len(names) * 0.4)))
    bars = ax.barh(range(len(names)), totals, color="steelblue", edgecolor="none")

    for bar, total in zip(bars, totals):
        ax.text(
            bar.get_width(),
            bar.get_y() + bar.get_height() / 2,
            f" {total:,.0f}",
            va="center",
            fontsize=9,
        )

    ax.set_yticks(range(len(names)))
    ax.set_yticklabels(names, fontsize=10)
    ax.set_xlabel("Total laid off", fontsize=11)
    ax.set_title(f"Top {len(names)} Companies by Layoffs", fontsize=12)
    ax.grid(axis="x", alpha=0.3)
    ax.set_xlim(0, totals.max() * 1.15)

    plt.tight_layout()
    result = _fig_to_base64(fig)
    plt.close(fig)
    return result


def _table_html(df: pd.DataFrame, rows: int | None = TABLE_ROWS) -> str:
    """Render a frame as an HTML table, missing values as dashes."""
    shown = df if rows is None else df.head(rows)
    return shown.to_html(index=False, na_rep="-", classes="data-table", border=0)


def _plot_html(encoded: str | None, alt: str) -> str:
    """Image tag for an encoded plot, or a placeholder."""
    if encoded is None:
        return "<p><em>No data to plot.</em></p>"
    return (
        f'<div class="plot-container">'
        f'<img src="data:image/png;base64,{encoded}" alt="{alt}"></div>'
    )


def _format_date(value: pd.Timestamp | None) -> str:
    return "-" if value is None else value.strftime("%Y-%m-%d")


def generate_html_report(
    report: ExplorationReport,
    output_path: Path,
    *,
    project: str,
    plots: bool = True,
) -> Path:
    """
    Generate the HTML exploration report.

    Args:
        report: Exploration report to render.
        output_path: Path to save the HTML report.
        project: Project name shown in the header.
        plots: Whether to embed charts.

    Returns:
        Path to the generated report.
    """
    log.info("Generating exploration report", output=str(output_path))

    rolling_plot = generate_rolling_total_plot(report.rolling_monthly) if plots else None
    company_plot = generate_top_companies_plot(report.by_company) if plots else None

    maxima = report.maxima
    charts = ""
    if plots:
        charts = f"""
    <div class="section">
        <h2>Layoffs over Time</h2>
        {_plot_html(rolling_plot, "Monthly layoffs and rolling total")}
    </div>
    <div class="section">
        <h2>Largest Layoffs by Company</h2>
        {_plot_html(company_plot, "Top companies by layoffs")}
    </div>"""

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Layoffs Report - {project}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background-color: #f5f5f5;
        }}
        h1 {{ color: #333; border-bottom: 2px solid #4a90a4; padding-bottom: 10px; }}
        h2 {{ color: #4a90a4; margin-top: 30px; }}
        .section {{
            background: white;
            border-radius: 8px;
            padding: 20px;
            margin-bottom: 20px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }}
        .metadata {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 15px;
        }}
        .metadata-item {{ background: #f8f9fa; padding: 10px 15px; border-radius: 4px; }}
        .metadata-item strong {{ display: block; color: #666; font-size: 0.85em; }}
        table {{ width: 100%; border-collapse: collapse; margin: 15px 0; }}
        th, td {{ padding: 8px 12px; text-align: left; border-bottom: 1px solid #ddd; }}
        th {{ background-color: #4a90a4; color: white; font-weight: 600; }}
        .plot-container {{ text-align: center; margin: 20px 0; }}
        .plot-container img {{ max-width: 100%; height: auto; }}
        .timestamp {{ color: #999; font-size: 0.9em; text-align: right; }}
    </style>
</head>
<body>
    <h1>Layoffs Exploration Report: {project}</h1>
    <p class="timestamp">Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>

    <div class="section">
        <h2>Overview</h2>
        <div class="metadata">
            <div class="metadata-item"><strong>Records</strong>{report.n_records}</div>
            <div class="metadata-item"><strong>Earliest date</strong>{_format_date(report.earliest)}</div>
            <div class="metadata-item"><strong>Latest date</strong>{_format_date(report.latest)}</div>
            <div class="metadata-item"><strong>Max laid off</strong>{maxima["max_total_laid_off"] if maxima["max_total_laid_off"] is not None else "-"}</div>
            <div class="metadata-item"><strong>Max percentage</strong>{maxima["max_percentage_laid_off"] if maxima["max_percentage_laid_off"] is not None else "-"}</div>
        </div>
    </div>
{charts}
    <div class="section">
        <h2>Top Companies per Year</h2>
        {_table_html(report.top_companies, rows=None)}
    </div>
    <div class="section">
        <h2>Layoffs by Year</h2>
        {_table_html(report.by_year, rows=None)}
    </div>
    <div class="section">
        <h2>Monthly Rolling Total</h2>
        {_table_html(report.rolling_monthly, rows=None)}
    </div>
    <div class="section">
        <h2>Layoffs by Company</h2>
        {_table_html(report.by_company)}
    </div>
    <div class="section">
        <h2>Layoffs by Country</h2>
        {_table_html(report.by_country)}
    </div>
    <div class="section">
        <h2>Layoffs by Industry</h2>
        {_table_html(report.by_industry)}
    </div>
    <div class="section">
        <h2>Layoffs by Stage</h2>
        {_table_html(report.by_stage)}
    </div>
    <div class="section">
        <h2>Full Shutdowns</h2>
        {_table_html(report.shutdowns)}
    </div>
</body>
</html>
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html_content, encoding="utf-8")
    log.info("Saved exploration report", path=str(output_path))
    return output_path
