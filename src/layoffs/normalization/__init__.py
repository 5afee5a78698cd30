"""
Data normalization layer for standardizing layoff records.

Handles sentinel clearing, measure typing, text canonicalization,
date parsing and industry backfill, applied in a fixed order.
"""

from layoffs.normalization.backfill import backfill_industry, build_industry_index
from layoffs.normalization.columns import normalize_columns, validate_required_columns
from layoffs.normalization.measures import coerce_measures
from layoffs.normalization.pipeline import (
    NORMALIZATION_PASSES,
    NormalizationResult,
    normalize,
)
from layoffs.normalization.sentinels import clear_sentinels, replace_measure_sentinels
from layoffs.normalization.temporal import find_unparseable_dates, parse_dates
from layoffs.normalization.text import (
    canonicalize_country,
    canonicalize_industry,
    trim_text,
)

__all__ = [
    "NORMALIZATION_PASSES",
    "NormalizationResult",
    "backfill_industry",
    "build_industry_index",
    "canonicalize_country",
    "canonicalize_industry",
    "clear_sentinels",
    "coerce_measures",
    "find_unparseable_dates",
    "normalize",
    "normalize_columns",
    "parse_dates",
    "replace_measure_sentinels",
    "trim_text",
    "validate_required_columns",
]
