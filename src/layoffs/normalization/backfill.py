"""
Industry backfill.

Records with no industry borrow it from another record of the same
company at the same location. Donors are looked up in a snapshot taken
before any fill is applied, so the outcome does not depend on row order
beyond the choice of the first donor.
"""

import pandas as pd

from layoffs.config.settings import CleaningConfig
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

_DONOR_COLUMN = "_donor_industry"


def missing_industry(df: pd.DataFrame) -> pd.Series:
    """Mask of records whose industry is absent or blank."""
    industry = df["industry"].astype("string")
    blank = industry.str.strip().eq("").fillna(False).astype(bool)
    return (industry.isna() | blank).astype(bool)


def build_industry_index(
    df: pd.DataFrame,
    keys: list[str],
) -> pd.DataFrame:
    """
    Map each join key to a donor industry.

    Only records with a complete key and a present, non-blank industry
    donate. When a key has several donors the first in scan order wins.

    Args:
        df: Working collection (the snapshot).
        keys: Join key columns.

    Returns:
        One row per key with the donor industry in '_donor_industry'.
    """
    has_key = df[keys].notna().all(axis=1)
    donors = df[has_key & ~missing_industry(df)]

    grouped = donors.groupby(keys, sort=False)["industry"]
    ambiguous = grouped.nunique()
    n_ambiguous = int((ambiguous > 1).sum())
    if n_ambiguous:
        log.debug("Keys with several candidate industries", keys=n_ambiguous)

    index = grouped.first().reset_index()
    return index.rename(columns={"industry": _DONOR_COLUMN})


def backfill_industry(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Fill missing industries from records sharing the join key.

    Records with an absent key column never match anything. Records with
    no donor keep their missing industry.

    Args:
        df: Working collection.
        cleaning: Cleaning rules (backfill_keys).

    Returns:
        DataFrame with industries backfilled.
    """
    keys = list(cleaning.backfill_keys)
    df = df.copy()

    recipients = (missing_industry(df) & df[keys].notna().all(axis=1)).astype(bool)
    if not recipients.any():
        log.info("No industries to backfill")
        return df

    index = build_industry_index(df, keys)
    matched = df.loc[recipients, keys].merge(index, on=keys, how="left")
    fills = pd.Series(matched[_DONOR_COLUMN].to_numpy(), index=df.index[recipients])
    fills = fills[fills.notna()]

    if not fills.empty:
        df.loc[fills.index, "industry"] = fills.astype("string")

    log.info(
        "Backfilled industries",
        candidates=int(recipients.sum()),
        filled=len(fills),
        unfilled=int(recipients.sum()) - len(fills),
    )
    return df
