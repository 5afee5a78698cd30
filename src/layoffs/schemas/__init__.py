"""
Schema definitions using Pandera for data validation.

All data contracts are defined here to ensure explicit,
validated data structures throughout the pipeline.
"""

from layoffs.schemas.layoffs import (
    CanonicalLayoffSchema,
    CompanyYearRankSchema,
    RawLayoffSchema,
)
from layoffs.schemas.registry import DataRole, SchemaRegistry

__all__ = [
    "CanonicalLayoffSchema",
    "CompanyYearRankSchema",
    "DataRole",
    "RawLayoffSchema",
    "SchemaRegistry",
]
