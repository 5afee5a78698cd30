"""
Column name normalization.

Provides canonical column naming so that header variants of the layoffs
extract (spreadsheet exports, Kaggle dumps) all map to the same names.
"""

import pandas as pd

from layoffs.utils.logging import get_logger

log = get_logger(__name__)

# Maps header variants (after lowercasing and trimming) to canonical names
COLUMN_MAPPING: dict[str, str] = {
    # Identity
    "company_name": "company",
    "city": "location",
    "location_hq": "location",
    "sector": "industry",
    # Measures
    "laid_off": "total_laid_off",
    "laid_off_count": "total_laid_off",
    "total_layoffs": "total_laid_off",
    "percentage": "percentage_laid_off",
    "pct_laid_off": "percentage_laid_off",
    "funds_raised": "funds_raised_millions",
    "funds_raised_(millions)": "funds_raised_millions",
    "funds_raised_usd_millions": "funds_raised_millions",
    # Dates
    "date_layoffs": "date",
    "layoff_date": "date",
    # Stage
    "funding_stage": "stage",
}


def _clean_header(name: object) -> str:
    """Lowercase a header and join words with underscores."""
    return "_".join(str(name).strip().lower().split())


def normalize_columns(
    df: pd.DataFrame,
    mapping: dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    Normalize column names to canonical form.

    Headers are lowercased and whitespace-joined with underscores before
    the mapping is applied, so 'Total Laid Off' becomes 'total_laid_off'.

    Args:
        df: DataFrame to normalize.
        mapping: Optional custom mapping (defaults to COLUMN_MAPPING).

    Returns:
        DataFrame with normalized column names.
    """
    mapping = mapping or COLUMN_MAPPING

    rename_dict: dict[object, str] = {}
    for col in df.columns:
        cleaned = _clean_header(col)
        target = mapping.get(cleaned, cleaned)
        if target != col:
            rename_dict[col] = target

    if rename_dict:
        log.debug("Normalizing columns", renamed=[str(c) for c in rename_dict])
        df = df.rename(columns=rename_dict)

    return df


def validate_required_columns(
    df: pd.DataFrame,
    required: list[str],
    *,
    raise_on_missing: bool = True,
) -> list[str]:
    """
    Check that required columns are present.

    Args:
        df: DataFrame to check.
        required: List of required column names.
        raise_on_missing: Whether to raise error if columns missing.

    Returns:
        List of missing columns.

    Raises:
        ValueError: If raise_on_missing and columns are missing.
    """
    missing = [col for col in required if col not in df.columns]

    if missing and raise_on_missing:
        msg = f"Missing required columns: {missing}"
        raise ValueError(msg)

    if missing:
        log.warning("Missing columns", missing=missing)

    return missing
