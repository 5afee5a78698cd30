"""
Cleaning pipeline orchestration.

Runs loading, deduplication, normalization and finalization end to end.
"""

from layoffs.etl.pipeline import (
    CleaningPipeline,
    CleaningResult,
    clean_frame,
    run_cleaning,
    write_canonical,
)

__all__ = [
    "CleaningPipeline",
    "CleaningResult",
    "clean_frame",
    "run_cleaning",
    "write_canonical",
]
