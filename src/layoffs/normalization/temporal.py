"""
Date parsing.

The extract stores dates as free text. This pass turns them into typed
calendar dates, tolerating values that do not parse.
"""

import pandas as pd

from layoffs.config.settings import CleaningConfig
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

# Frame attribute through which passes publish counts to the runner
PASS_COUNTS_ATTR = "normalization_counts"


def _parseable_text(dates: pd.Series, cleaning: CleaningConfig) -> pd.Series:
    """Date text with sentinels and blanks removed."""
    text = dates.astype("string").str.strip()
    skip = (
        text.eq(cleaning.date_sentinel)
        | text.str.casefold().eq(cleaning.text_sentinel.casefold())
        | text.eq("")
    )
    return text.mask(skip.fillna(False).astype(bool))


def find_unparseable_dates(dates: pd.Series, cleaning: CleaningConfig) -> pd.Series:
    """
    Return the date values that do not match the configured format.

    Sentinels in any casing and blank cells are not counted as unparseable.

    Args:
        dates: Raw date text.
        cleaning: Cleaning rules (date_format, date_sentinel, text_sentinel).

    Returns:
        The offending values, indexed like the input.
    """
    if pd.api.types.is_datetime64_any_dtype(dates.dtype):
        return dates.iloc[0:0]

    text = _parseable_text(dates, cleaning)
    parsed = pd.to_datetime(text, format=cleaning.date_format, errors="coerce")
    return dates[(text.notna() & parsed.isna()).astype(bool)]


def parse_dates(
    df: pd.DataFrame,
    cleaning: CleaningConfig,
    date_column: str = "date",
) -> pd.DataFrame:
    """
    Parse the date column into typed dates.

    The exact date sentinel ('None') and the text sentinel in any casing
    become missing. Values that do not match the format are logged and
    also become missing; the run carries on. Their number is published
    as 'unparseable_dates' in the frame's normalization counts.

    Args:
        df: Working collection.
        cleaning: Cleaning rules (date_format, date_sentinel, text_sentinel).
        date_column: Name of date column.

    Returns:
        DataFrame with a datetime64 date column.
    """
    if pd.api.types.is_datetime64_any_dtype(df[date_column].dtype):
        log.debug("Date column already typed, skipping parse", column=date_column)
        return df

    df = df.copy()
    text = _parseable_text(df[date_column], cleaning)
    parsed = pd.to_datetime(text, format=cleaning.date_format, errors="coerce")

    unparseable = find_unparseable_dates(df[date_column], cleaning)
    if len(unparseable):
        log.warning(
            "Unparseable dates treated as missing",
            format=cleaning.date_format,
            count=len(unparseable),
            samples=[str(v).strip() for v in unparseable.drop_duplicates().head(5)],
        )

    df[date_column] = parsed.astype("datetime64[ns]")
    df.attrs[PASS_COUNTS_ATTR] = {"unparseable_dates": len(unparseable)}

    log.info(
        "Parsed dates",
        parsed=int(parsed.notna().sum()),
        missing=int(parsed.isna().sum()),
    )
    return df
