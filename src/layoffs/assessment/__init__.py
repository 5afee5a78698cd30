"""
Audit of cleaned layoff tables.

Re-checks a canonical table for duplicates, leftover sentinels, spelling
variants and records without measures.
"""

from layoffs.assessment.core import (
    AuditResult,
    AuditRunner,
    CheckResult,
    CheckStatus,
    audit_canonical,
)
from layoffs.assessment.reporter import AuditReporter

__all__ = [
    "AuditReporter",
    "AuditResult",
    "AuditRunner",
    "CheckResult",
    "CheckStatus",
    "audit_canonical",
]
