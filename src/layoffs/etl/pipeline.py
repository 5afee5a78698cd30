"""
Cleaning pipeline implementation.

Orchestrates loading, deduplication, normalization and finalization to
produce the canonical layoffs table.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from layoffs.config.settings import CleaningConfig, PipelineConfig
from layoffs.deduplication.core import remove_duplicates
from layoffs.ingestion.layoffs import load_raw_layoffs, prepare_raw_frame
from layoffs.normalization.pipeline import normalize
from layoffs.utils.hashing import hash_config, hash_dataframe
from layoffs.utils.logging import get_logger, log_context
from layoffs.validation.finalize import finalize

log = get_logger(__name__)


@dataclass
class CleaningResult:
    """
    Result of a cleaning run.

    Attributes:
        canonical: The canonical layoffs table.
        n_raw: Records in the raw extract.
        n_duplicates: Exact duplicates removed.
        n_backfilled: Industries filled from sibling records.
        n_unparseable_dates: Dates that did not parse and were cleared.
        n_dropped_unmeasured: Records dropped for lacking both measures.
        pass_changes: Cells changed per normalization pass.
        input_fingerprint: Hash of the raw extract.
        output_fingerprint: Hash of the canonical table.
        config_fingerprint: Hash of the cleaning rules used.
        output_path: Path where the table was written (if any).
    """

    canonical: pd.DataFrame
    n_raw: int
    n_duplicates: int
    n_backfilled: int
    n_unparseable_dates: int
    n_dropped_unmeasured: int
    pass_changes: dict[str, int] = field(default_factory=dict)
    input_fingerprint: str = ""
    output_fingerprint: str = ""
    config_fingerprint: str = ""
    output_path: Path | None = None

    @property
    def n_canonical(self) -> int:
        """Records in the canonical table."""
        return len(self.canonical)


def clean_frame(raw: pd.DataFrame, cleaning: CleaningConfig | None = None) -> CleaningResult:
    """
    Run deduplication, normalization and finalization in memory.

    The input frame is never modified; all work happens on a copy.

    Args:
        raw: Raw extract (any header spelling, values as text).
        cleaning: Cleaning rules. Defaults to CleaningConfig().

    Returns:
        CleaningResult without an output path.
    """
    cleaning = cleaning or CleaningConfig()
    working = prepare_raw_frame(raw.copy())

    with log_context(stage="deduplicate"):
        deduplicated = remove_duplicates(working)

    with log_context(stage="normalize"):
        normalized = normalize(deduplicated.data, cleaning)

    with log_context(stage="finalize"):
        canonical = finalize(normalized.data)

    return CleaningResult(
        canonical=canonical,
        n_raw=len(working),
        n_duplicates=deduplicated.n_removed,
        n_backfilled=normalized.n_backfilled,
        n_unparseable_dates=normalized.n_unparseable_dates,
        n_dropped_unmeasured=len(normalized.data) - len(canonical),
        pass_changes=normalized.changes,
        input_fingerprint=hash_dataframe(working),
        output_fingerprint=hash_dataframe(canonical),
        config_fingerprint=hash_config(cleaning),
    )


def write_canonical(df: pd.DataFrame, output_path: Path) -> Path:
    """
    Write a canonical table as CSV.

    Dates are written as ISO dates and missing values as empty cells.

    Args:
        df: Canonical table.
        output_path: Destination CSV.

    Returns:
        The path written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False, date_format="%Y-%m-%d")
    log.info("Saved canonical table", path=str(output_path), rows=len(df))
    return output_path


class CleaningPipeline:
    """
    Cleaning pipeline for the layoffs extract.

    Loads the raw extract, removes exact duplicates, normalizes values,
    drops unmeasured records and writes the canonical table.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize cleaning pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config

    def run(self, output_path: Path | None = None) -> CleaningResult:
        """
        Run the full pipeline.

        A missing or malformed extract aborts the run before anything is
        cleaned or written.

        Args:
            output_path: Optional path to save the canonical CSV.

        Returns:
            CleaningResult with the canonical table and statistics.
        """
        with log_context(project=self.config.project):
            log.info("Starting cleaning pipeline", source=str(self.config.raw_path))

            with log_context(stage="load"):
                raw = load_raw_layoffs(self.config)

            result = clean_frame(raw, self.config.cleaning)

            if output_path is not None:
                result.output_path = write_canonical(result.canonical, output_path)

            log.info(
                "Cleaning pipeline complete",
                raw=result.n_raw,
                duplicates=result.n_duplicates,
                backfilled=result.n_backfilled,
                unparseable_dates=result.n_unparseable_dates,
                dropped_unmeasured=result.n_dropped_unmeasured,
                canonical=result.n_canonical,
                fingerprint=result.output_fingerprint,
                config_fingerprint=result.config_fingerprint,
            )

        return result


def run_cleaning(
    config: PipelineConfig,
    output_path: Path | None = None,
) -> CleaningResult:
    """
    Run the cleaning pipeline.

    Args:
        config: Pipeline configuration.
        output_path: Optional output path for the canonical CSV.

    Returns:
        CleaningResult.
    """
    return CleaningPipeline(config).run(output_path=output_path)
