"""
Typing of the layoff measures.

Counts become nullable integers; percentages stay text as reported. Counts
that cannot be read are logged and treated as missing rather than aborting
the run.
"""

import pandas as pd

from layoffs.config.settings import COUNT_COLUMNS, CleaningConfig
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

# Number of offending values included in warnings
SAMPLE_SIZE = 5


def _sample(values: pd.Series) -> list[str]:
    """A few distinct offending values for log output."""
    return [str(v) for v in values.drop_duplicates().head(SAMPLE_SIZE)]


def _blank(text: pd.Series) -> pd.Series:
    """Mask of empty or whitespace-only cells."""
    return text.str.strip().eq("").fillna(False).astype(bool)


def coerce_measures(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Type the count columns and tidy the percentage column.

    Blank cells become missing. Counts that are not whole non-negative
    numbers are logged and become missing. Thousands separators are
    tolerated.

    Args:
        df: Working collection, measure sentinels already cleared.
        cleaning: Cleaning rules (unused, kept for the pass signature).

    Returns:
        DataFrame with Int64 count columns.
    """
    df = df.copy()

    for col in COUNT_COLUMNS:
        if pd.api.types.is_integer_dtype(df[col].dtype):
            df[col] = df[col].astype("Int64")
            continue

        text = df[col].astype("string").str.strip().str.replace(",", "", regex=False)
        text = text.mask(_blank(text))
        numeric = pd.to_numeric(text, errors="coerce").astype("Float64")

        unreadable = (text.notna() & numeric.isna()).astype(bool)
        invalid = ((numeric < 0) | (numeric % 1 != 0)).fillna(False).astype(bool)
        rejected = unreadable | invalid

        if rejected.any():
            log.warning(
                "Unreadable counts treated as missing",
                column=col,
                count=int(rejected.sum()),
                samples=_sample(df.loc[rejected, col]),
            )
            numeric = numeric.mask(rejected)

        df[col] = numeric.astype("Int64")

    text = df["percentage_laid_off"].astype("string").str.strip()
    df["percentage_laid_off"] = text.mask(_blank(text))

    log.info(
        "Typed layoff measures",
        total_laid_off=int(df["total_laid_off"].notna().sum()),
        funds_raised_millions=int(df["funds_raised_millions"].notna().sum()),
    )
    return df

