"""
Data ingestion layer for loading layoff extracts with schema validation.

All raw data loading happens through this module to ensure
consistent validation at system boundaries.
"""

from layoffs.ingestion.layoffs import (
    CanonicalLayoffsLoader,
    RawLayoffsLoader,
    load_canonical_layoffs,
    load_raw_layoffs,
    prepare_raw_frame,
    read_raw_layoffs,
)

__all__ = [
    "CanonicalLayoffsLoader",
    "RawLayoffsLoader",
    "load_canonical_layoffs",
    "load_raw_layoffs",
    "prepare_raw_frame",
    "read_raw_layoffs",
]
