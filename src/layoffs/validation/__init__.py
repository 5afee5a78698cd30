"""Schema validation of data files and finalization of the canonical table."""

from layoffs.validation.core import ValidationResult, ValidationRunner
from layoffs.validation.finalize import (
    drop_bookkeeping,
    drop_unmeasured,
    finalize,
    to_canonical_types,
)
from layoffs.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "ValidationResult",
    "ValidationRunner",
    "drop_bookkeeping",
    "drop_unmeasured",
    "finalize",
    "to_canonical_types",
]
