"""
Finalization of the cleaned collection.

Drops records that carry no layoff measure, removes bookkeeping columns
and fixes the column types of the canonical table.
"""

import pandas as pd

from layoffs.config.settings import COUNT_COLUMNS, LAYOFF_COLUMNS, TEXT_COLUMNS
from layoffs.deduplication.core import ROW_NUMBER_COLUMN
from layoffs.schemas.layoffs import CanonicalLayoffSchema
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

BOOKKEEPING_COLUMNS: tuple[str, ...] = (ROW_NUMBER_COLUMN,)


def unmeasured_mask(df: pd.DataFrame) -> pd.Series:
    """Mask of records with neither a headcount nor a percentage."""
    return (df["total_laid_off"].isna() & df["percentage_laid_off"].isna()).astype(bool)


def drop_unmeasured(df: pd.DataFrame) -> pd.DataFrame:
    """
    Remove records lacking both total_laid_off and percentage_laid_off.

    Args:
        df: Normalized collection.

    Returns:
        Records with at least one measure.
    """
    mask = unmeasured_mask(df)
    kept = df[~mask]
    log.info(
        "Dropped records without layoff measures",
        rows_before=len(df),
        rows_after=len(kept),
        dropped=int(mask.sum()),
    )
    return kept


def drop_bookkeeping(df: pd.DataFrame) -> pd.DataFrame:
    """Remove transient columns such as the duplicate row number."""
    present = [col for col in BOOKKEEPING_COLUMNS if col in df.columns]
    return df.drop(columns=present)


def to_canonical_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Cast the layoff columns to their canonical dtypes.

    Blank text cells become missing.

    Args:
        df: Collection holding exactly the layoff columns.

    Returns:
        Typed copy in canonical column order.
    """
    df = df.loc[:, list(LAYOFF_COLUMNS)].copy()
    for col in TEXT_COLUMNS:
        text = df[col].astype("string")
        # CSV cannot tell an empty cell from a missing one
        df[col] = text.mask(text.str.strip().eq("").fillna(False).astype(bool))
    for col in COUNT_COLUMNS:
        df[col] = df[col].astype("Int64")
    df["date"] = pd.to_datetime(df["date"]).astype("datetime64[ns]")
    return df


def finalize(df: pd.DataFrame, *, validate: bool = True) -> pd.DataFrame:
    """
    Produce the canonical table.

    Args:
        df: Normalized collection.
        validate: Whether to validate against CanonicalLayoffSchema.

    Returns:
        Canonical table with a fresh index.

    Raises:
        pandera.errors.SchemaError: If the result breaks the canonical contract.
        pandera.errors.SchemaErrors: If it breaks it in more than one way.
    """
    canonical = to_canonical_types(drop_bookkeeping(drop_unmeasured(df)))
    canonical = canonical.reset_index(drop=True)

    if validate:
        canonical = CanonicalLayoffSchema.validate(canonical)

    log.info("Finalized canonical table", rows=len(canonical))
    return canonical
