"""
Exact-duplicate detection and removal.

Two records are duplicates only when every identity column matches,
absent values included. Ranks are assigned in scan order, so the first
occurrence of each record is the one that survives.
"""

from dataclasses import dataclass

import pandas as pd

from layoffs.config.settings import LAYOFF_COLUMNS
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

ROW_NUMBER_COLUMN = "row_num"
IDENTITY_COLUMNS: tuple[str, ...] = LAYOFF_COLUMNS


@dataclass
class DeduplicationResult:
    """
    Result of duplicate removal.

    Attributes:
        data: Retained records, still carrying the row number column.
        n_input: Number of records before deduplication.
        n_removed: Number of duplicate records dropped.
    """

    data: pd.DataFrame
    n_input: int
    n_removed: int

    @property
    def n_retained(self) -> int:
        """Number of records kept."""
        return len(self.data)


def assign_row_numbers(
    df: pd.DataFrame,
    key: tuple[str, ...] | list[str] = IDENTITY_COLUMNS,
) -> pd.DataFrame:
    """
    Number each record within its identity group.

    Numbers start at 1 and follow the frame's row order. Absent values
    are grouped together rather than dropped.

    Args:
        df: Working collection.
        key: Identity columns.

    Returns:
        Copy of df with a 'row_num' column appended.
    """
    missing = [col for col in key if col not in df.columns]
    if missing:
        msg = f"Missing identity columns: {missing}"
        raise ValueError(msg)

    df = df.copy()
    if df.empty:
        df[ROW_NUMBER_COLUMN] = pd.Series(dtype="int64")
        return df

    groups = df.groupby(list(key), dropna=False, sort=False)
    df[ROW_NUMBER_COLUMN] = groups.cumcount().astype("int64") + 1
    return df


def find_duplicates(
    df: pd.DataFrame,
    key: tuple[str, ...] | list[str] = IDENTITY_COLUMNS,
) -> pd.DataFrame:
    """
    List the records that deduplication would remove.

    Args:
        df: Working collection.
        key: Identity columns.

    Returns:
        Records with row_num > 1, in scan order.
    """
    numbered = assign_row_numbers(df, key)
    return numbered[numbered[ROW_NUMBER_COLUMN] > 1]


def remove_duplicates(
    df: pd.DataFrame,
    key: tuple[str, ...] | list[str] = IDENTITY_COLUMNS,
) -> DeduplicationResult:
    """
    Keep only the first occurrence of every identity key.

    Records are never modified here, only dropped. Running this again on
    its own output removes nothing.

    Args:
        df: Working collection.
        key: Identity columns.

    Returns:
        DeduplicationResult with retained records and counts.
    """
    numbered = assign_row_numbers(df, key)
    retained = numbered[numbered[ROW_NUMBER_COLUMN] == 1].reset_index(drop=True)
    n_removed = len(numbered) - len(retained)

    log.info(
        "Removed duplicate records",
        rows_before=len(numbered),
        rows_after=len(retained),
        removed=n_removed,
    )

    return DeduplicationResult(data=retained, n_input=len(numbered), n_removed=n_removed)
