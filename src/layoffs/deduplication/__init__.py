"""Exact-duplicate detection over the full record identity key."""

from layoffs.deduplication.core import (
    IDENTITY_COLUMNS,
    ROW_NUMBER_COLUMN,
    DeduplicationResult,
    assign_row_numbers,
    find_duplicates,
    remove_duplicates,
)

__all__ = [
    "IDENTITY_COLUMNS",
    "ROW_NUMBER_COLUMN",
    "DeduplicationResult",
    "assign_row_numbers",
    "find_duplicates",
    "remove_duplicates",
]
