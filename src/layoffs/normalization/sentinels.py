"""
Sentinel handling.

The extract spells missing data as the literal text 'none'. Two passes turn
it into real missing values: an exact-match pass over the measures before
they are typed, and a case-insensitive sweep over every text column later.
"""

import pandas as pd

from layoffs.config.settings import MEASURE_COLUMNS, CleaningConfig
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def is_text_column(series: pd.Series) -> bool:
    """Whether a column still holds text (as opposed to typed values)."""
    return pd.api.types.is_string_dtype(series.dtype)


def replace_measure_sentinels(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Replace the exact measure sentinel with missing values.

    Only the three measure columns are touched and the match is
    case-sensitive. Must run before the measures are typed.

    Args:
        df: Working collection.
        cleaning: Cleaning rules.

    Returns:
        DataFrame with sentinel measures cleared.
    """
    df = df.copy()
    cleared: dict[str, int] = {}

    for col in MEASURE_COLUMNS:
        if not is_text_column(df[col]):
            continue
        mask = df[col].eq(cleaning.measure_sentinel).fillna(False).astype(bool)
        if mask.any():
            df[col] = df[col].mask(mask)
            cleared[col] = int(mask.sum())

    log.info("Cleared measure sentinels", sentinel=cleaning.measure_sentinel, cleared=cleared)
    return df


def clear_sentinels(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Clear the text sentinel from every text column, ignoring case.

    Typed columns (counts, parsed dates) are skipped since they can no
    longer hold the sentinel.

    Args:
        df: Working collection.
        cleaning: Cleaning rules.

    Returns:
        DataFrame without sentinel text.
    """
    df = df.copy()
    sentinel = cleaning.text_sentinel.casefold()
    cleared: dict[str, int] = {}

    for col in df.columns:
        if not is_text_column(df[col]):
            continue
        text = df[col].astype("string")
        mask = text.str.casefold().eq(sentinel).fillna(False).astype(bool)
        if mask.any():
            df[col] = df[col].mask(mask)
            cleared[str(col)] = int(mask.sum())

    log.info("Cleared text sentinels", sentinel=cleaning.text_sentinel, cleared=cleared)
    return df
