"""
Standardization of free-text columns.

Trims whitespace and collapses spelling variants of categorical values
(industry labels, country names) to one canonical form.
"""

import pandas as pd

from layoffs.config.settings import CleaningConfig
from layoffs.normalization.sentinels import is_text_column
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def trim_text(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Strip leading and trailing whitespace from the configured columns.

    Args:
        df: Working collection.
        cleaning: Cleaning rules (trim_columns).

    Returns:
        DataFrame with trimmed text.
    """
    df = df.copy()
    for col in cleaning.trim_columns:
        if is_text_column(df[col]):
            df[col] = df[col].str.strip()
    return df


def canonicalize_industry(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Collapse industry labels sharing a prefix into one label.

    'Crypto Currency' and 'CryptoCurrency' both become 'Crypto'. The
    prefix match is case-sensitive.

    Args:
        df: Working collection.
        cleaning: Cleaning rules (industry_prefixes).

    Returns:
        DataFrame with canonical industry labels.
    """
    df = df.copy()
    for prefix, label in cleaning.industry_prefixes.items():
        mask = df["industry"].str.startswith(prefix, na=False).astype(bool)
        changed = mask & df["industry"].ne(label).fillna(True).astype(bool)
        if changed.any():
            log.info(
                "Canonicalized industry",
                prefix=prefix,
                label=label,
                variants=sorted(df.loc[changed, "industry"].unique().tolist()),
                rows=int(changed.sum()),
            )
        df.loc[mask, "industry"] = label
    return df


def canonicalize_country(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
) -> pd.DataFrame:
    """
    Strip trailing periods from matching country names.

    'United States.' becomes 'United States'. Only countries starting
    with a configured prefix are touched.

    Args:
        df: Working collection.
        cleaning: Cleaning rules (country_prefixes).

    Returns:
        DataFrame with canonical country names.
    """
    df = df.copy()
    if not cleaning.country_prefixes:
        return df

    country = df["country"]
    mask = country.str.startswith(tuple(cleaning.country_prefixes), na=False).astype(bool)
    stripped = country[mask].str.rstrip(".")
    n_changed = int(stripped.ne(country[mask]).sum())

    df.loc[mask, "country"] = stripped
    log.info("Canonicalized countries", prefixes=cleaning.country_prefixes, rows=n_changed)
    return df
