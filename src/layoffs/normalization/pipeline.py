"""
Ordered normalization passes.

Each pass takes the working collection and the cleaning rules and returns
a new collection. The order is fixed: later passes rely on the state left
by earlier ones (measures are typed only after their sentinels are
cleared; the broad sentinel sweep runs after dates are parsed; backfill
runs last so it sees canonical industries).
"""

from collections.abc import Callable
from dataclasses import dataclass, field

import pandas as pd

from layoffs.config.settings import CleaningConfig
from layoffs.normalization.backfill import backfill_industry
from layoffs.normalization.measures import coerce_measures
from layoffs.normalization.sentinels import clear_sentinels, replace_measure_sentinels
from layoffs.normalization.temporal import PASS_COUNTS_ATTR, parse_dates
from layoffs.normalization.text import (
    canonicalize_country,
    canonicalize_industry,
    trim_text,
)
from layoffs.utils.logging import get_logger, log_context

log = get_logger(__name__)

NormalizationPass = Callable[[pd.DataFrame, CleaningConfig], pd.DataFrame]

NORMALIZATION_PASSES: tuple[tuple[str, NormalizationPass], ...] = (
    ("replace_measure_sentinels", replace_measure_sentinels),
    ("coerce_measures", coerce_measures),
    ("trim_text", trim_text),
    ("canonicalize_industry", canonicalize_industry),
    ("canonicalize_country", canonicalize_country),
    ("parse_dates", parse_dates),
    ("clear_sentinels", clear_sentinels),
    ("backfill_industry", backfill_industry),
)

_NA_TOKEN = "\x00<NA>"


@dataclass
class NormalizationResult:
    """
    Result of running all normalization passes.

    Attributes:
        data: Normalized collection.
        changes: Number of cells changed, per pass name.
        counts: Counts published by the passes themselves.
    """

    data: pd.DataFrame
    changes: dict[str, int] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def n_backfilled(self) -> int:
        """Industries filled in by the backfill pass."""
        return self.changes.get("backfill_industry", 0)

    @property
    def n_unparseable_dates(self) -> int:
        """Date values that could not be parsed."""
        return self.counts.get("unparseable_dates", 0)


def count_changed_cells(before: pd.DataFrame, after: pd.DataFrame) -> int:
    """
    Count cells whose value differs between two aligned frames.

    Values are compared as text so that typing a column only counts the
    cells whose content actually changed.
    """
    total = 0
    for col in before.columns:
        if col not in after.columns:
            continue
        old = before[col].astype("string").fillna(_NA_TOKEN)
        new = after[col].astype("string").fillna(_NA_TOKEN)
        total += int(old.ne(new).sum())
    return total


def normalize(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
    passes: tuple[tuple[str, NormalizationPass], ...] = NORMALIZATION_PASSES,
) -> NormalizationResult:
    """
    Run the normalization passes in order.

    Args:
        df: Deduplicated working collection.
        cleaning: Cleaning rules.
        passes: Ordered (name, pass) pairs.

    Returns:
        NormalizationResult with the normalized collection and counts.
    """
    result = NormalizationResult(data=df)

    current = df
    for name, normalization_pass in passes:
        with log_context(normalization_pass=name):
            updated = normalization_pass(current, cleaning)
            result.counts.update(updated.attrs.pop(PASS_COUNTS_ATTR, {}))
            result.changes[name] = count_changed_cells(current, updated)
            current = updated

    result.data = current
    log.info("Normalization complete", changes=result.changes)
    return result
