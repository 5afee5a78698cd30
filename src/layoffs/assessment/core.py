"""
Core audit logic for cleaned layoff tables.

Re-checks a canonical table for the defects the cleaning pipeline is meant
to remove: duplicates, sentinel text, spelling variants and records
without measures.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pandas as pd

from layoffs.config.settings import LAYOFF_COLUMNS, CleaningConfig, PipelineConfig
from layoffs.deduplication.core import ROW_NUMBER_COLUMN, assign_row_numbers
from layoffs.ingestion.layoffs import load_canonical_layoffs
from layoffs.normalization.backfill import missing_industry
from layoffs.normalization.sentinels import is_text_column
from layoffs.utils.logging import get_logger
from layoffs.validation.finalize import unmeasured_mask

log = get_logger(__name__)

# Failing rows kept per check for display
SAMPLE_ROWS = 10


class CheckStatus(Enum):
    """Status of an individual check."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    SKIP = "skip"


@dataclass
class CheckResult:
    """
    Result of a single audit check.

    Attributes:
        name: Check name.
        status: Pass/warn/fail/skip.
        message: Human-readable description.
        details: Optional additional details.
        n_checked: Number of rows checked.
        n_passed: Number of rows passing.
        n_failed: Number of rows failing.
        sample_failures: Sample of failing rows for debugging.
    """

    name: str
    status: CheckStatus
    message: str
    details: str | None = None
    n_checked: int = 0
    n_passed: int = 0
    n_failed: int = 0
    sample_failures: pd.DataFrame | None = None


@dataclass
class AuditResult:
    """
    Result of a full audit.

    Attributes:
        source: Where the audited table came from (path or label).
        checks: List of individual check results.
    """

    source: str
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def overall_status(self) -> CheckStatus:
        """Determine overall status from individual checks."""
        if any(c.status == CheckStatus.FAIL for c in self.checks):
            return CheckStatus.FAIL
        if any(c.status == CheckStatus.WARN for c in self.checks):
            return CheckStatus.WARN
        if all(c.status == CheckStatus.SKIP for c in self.checks):
            return CheckStatus.SKIP
        return CheckStatus.PASS

    @property
    def n_passed(self) -> int:
        """Count checks that passed."""
        return sum(1 for c in self.checks if c.status == CheckStatus.PASS)

    @property
    def n_failed(self) -> int:
        """Count checks that failed."""
        return sum(1 for c in self.checks if c.status == CheckStatus.FAIL)

    @property
    def n_warned(self) -> int:
        """Count checks with warnings."""
        return sum(1 for c in self.checks if c.status == CheckStatus.WARN)


def _row_check(
    name: str,
    df: pd.DataFrame,
    failing: pd.Series,
    *,
    ok_message: str,
    fail_message: str,
    failure_status: CheckStatus = CheckStatus.FAIL,
    columns: list[str] | None = None,
) -> CheckResult:
    """Build a CheckResult from a per-row failure mask."""
    n_failed = int(failing.sum())
    n_checked = len(df)

    if n_failed == 0:
        return CheckResult(
            name=name,
            status=CheckStatus.PASS,
            message=ok_message,
            n_checked=n_checked,
            n_passed=n_checked,
        )

    sample = df.loc[failing, columns or list(df.columns)].head(SAMPLE_ROWS)
    return CheckResult(
        name=name,
        status=failure_status,
        message=fail_message.format(n=n_failed),
        n_checked=n_checked,
        n_passed=n_checked - n_failed,
        n_failed=n_failed,
        sample_failures=sample.reset_index(drop=True),
    )


class AuditRunner:
    """
    Runs the audit suite over a canonical layoffs table.

    Each check looks for one kind of defect and reports how many rows
    show it. Checks on columns that are not present are skipped.
    """

    def __init__(self, cleaning: CleaningConfig | None = None) -> None:
        """
        Initialize audit runner.

        Args:
            cleaning: Cleaning rules the table is checked against.
        """
        self.cleaning = cleaning or CleaningConfig()

    def run(self, df: pd.DataFrame, source: str = "<memory>") -> AuditResult:
        """
        Run full audit suite.

        Args:
            df: Canonical layoffs table.
            source: Label shown in reports.

        Returns:
            AuditResult with all check results.
        """
        log.info("Starting audit", source=source, rows=len(df))

        result = AuditResult(source=source)
        checks = [
            ("no_duplicates", list(LAYOFF_COLUMNS), self._check_no_duplicates),
            ("no_sentinels", [], self._check_no_sentinels),
            ("industry_canonical", ["industry"], self._check_industry_canonical),
            ("country_canonical", ["country"], self._check_country_canonical),
            (
                "measures_present",
                ["total_laid_off", "percentage_laid_off"],
                self._check_measures_present,
            ),
            ("percentage_range", ["percentage_laid_off"], self._check_percentage_range),
            ("dates_parsed", ["date"], self._check_dates_parsed),
            ("industry_coverage", ["industry"], self._check_industry_coverage),
        ]

        for name, required, check in checks:
            missing = [col for col in required if col not in df.columns]
            if missing:
                result.checks.append(
                    CheckResult(
                        name=name,
                        status=CheckStatus.SKIP,
                        message=f"Missing columns: {', '.join(missing)}",
                    )
                )
                continue
            result.checks.append(check(df))

        log.info(
            "Audit complete",
            overall=result.overall_status.value,
            passed=result.n_passed,
            failed=result.n_failed,
            warned=result.n_warned,
        )
        return result

    def _check_no_duplicates(self, df: pd.DataFrame) -> CheckResult:
        """No record may repeat another on every column."""
        numbered = assign_row_numbers(df[list(LAYOFF_COLUMNS)])
        failing = (numbered[ROW_NUMBER_COLUMN] > 1).set_axis(df.index)
        return _row_check(
            "no_duplicates",
            df,
            failing,
            ok_message="No exact duplicates",
            fail_message="{n} exact duplicate records",
        )

    def _check_no_sentinels(self, df: pd.DataFrame) -> CheckResult:
        """No text cell may still hold the sentinel, in any casing."""
        sentinel = self.cleaning.text_sentinel.casefold()
        failing = pd.Series(False, index=df.index)
        offending: list[str] = []

        for col in df.columns:
            if not is_text_column(df[col]):
                continue
            hits = (
                df[col].astype("string").str.casefold().eq(sentinel).fillna(False).astype(bool)
            )
            if hits.any():
                offending.append(str(col))
                failing |= hits

        result = _row_check(
            "no_sentinels",
            df,
            failing,
            ok_message=f"No '{self.cleaning.text_sentinel}' text left",
            fail_message="{n} records still hold sentinel text",
        )
        if offending:
            result.details = f"Columns: {', '.join(offending)}"
        return result

    def _check_industry_canonical(self, df: pd.DataFrame) -> CheckResult:
        """Industries with a configured prefix must carry the canonical label."""
        industry = df["industry"].astype("string")
        failing = pd.Series(False, index=df.index)
        for prefix, label in self.cleaning.industry_prefixes.items():
            variant = industry.str.startswith(prefix, na=False) & industry.ne(label)
            failing |= variant.fillna(False).astype(bool)

        return _row_check(
            "industry_canonical",
            df,
            failing,
            ok_message="Industry labels canonical",
            fail_message="{n} industry spelling variants",
            columns=["company", "industry"],
        )

    def _check_country_canonical(self, df: pd.DataFrame) -> CheckResult:
        """Configured countries must not end with a period."""
        country = df["country"].astype("string")
        prefixes = tuple(self.cleaning.country_prefixes)
        if prefixes:
            failing = (
                country.str.startswith(prefixes, na=False) & country.str.endswith(".", na=False)
            ).fillna(False).astype(bool)
        else:
            failing = pd.Series(False, index=df.index)

        return _row_check(
            "country_canonical",
            df,
            failing,
            ok_message="Country names canonical",
            fail_message="{n} country names with trailing periods",
            columns=["company", "country"],
        )

    def _check_measures_present(self, df: pd.DataFrame) -> CheckResult:
        """Every record carries a headcount or a percentage."""
        return _row_check(
            "measures_present",
            df,
            unmeasured_mask(df),
            ok_message="Every record has a layoff measure",
            fail_message="{n} records without any layoff measure",
        )

    def _check_percentage_range(self, df: pd.DataFrame) -> CheckResult:
        """Percentages are kept as reported; those outside [0, 1] are flagged."""
        text = df["percentage_laid_off"].astype("string")
        numeric = pd.to_numeric(text, errors="coerce")
        present = text.notna()
        failing = (present & (numeric.isna() | (numeric < 0) | (numeric > 1))).fillna(True)

        return _row_check(
            "percentage_range",
            df,
            failing.astype(bool),
            ok_message="Percentages within [0, 1]",
            fail_message="{n} percentages outside [0, 1] or not numeric",
            failure_status=CheckStatus.WARN,
            columns=["company", "percentage_laid_off"],
        )

    def _check_dates_parsed(self, df: pd.DataFrame) -> CheckResult:
        """Records without a date are allowed but reported."""
        return _row_check(
            "dates_parsed",
            df,
            df["date"].isna().astype(bool),
            ok_message="Every record has a date",
            fail_message="{n} records without a date",
            failure_status=CheckStatus.WARN,
            columns=["company", "location", "date"],
        )

    def _check_industry_coverage(self, df: pd.DataFrame) -> CheckResult:
        """Records whose industry could not be backfilled are reported."""
        return _row_check(
            "industry_coverage",
            df,
            missing_industry(df),
            ok_message="Every record has an industry",
            fail_message="{n} records without an industry",
            failure_status=CheckStatus.WARN,
            columns=["company", "location", "industry"],
        )


def audit_canonical(config: PipelineConfig, path: Path | None = None) -> AuditResult:
    """
    Load a canonical table from disk and audit it.

    Schema validation is skipped on load so that defects show up as
    individual checks instead of a single load error.

    Args:
        config: Pipeline configuration.
        path: Canonical CSV. Defaults to the project's canonical path.

    Returns:
        AuditResult; a missing file yields a single failed check.
    """
    path = path or config.canonical_path

    if not path.exists():
        result = AuditResult(source=str(path))
        result.checks.append(
            CheckResult(
                name="canonical_exists",
                status=CheckStatus.FAIL,
                message=f"Canonical table not found: {path}",
            )
        )
        return result

    df = load_canonical_layoffs(config, path, validate=False)
    return AuditRunner(config.cleaning).run(df, source=str(path))
