"""
Schema registry for versioning and discovery.

Provides centralized access to all schema definitions and their versions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from layoffs.schemas.layoffs import (
    CanonicalLayoffSchema,
    CompanyYearRankSchema,
    RawLayoffSchema,
)

if TYPE_CHECKING:
    import pandas as pd


class DataRole(Enum):
    """Classification of data products by their role in the pipeline."""

    SOURCE = "source"  # Raw external data
    OUTPUT = "output"  # Canonical table
    REPORT = "report"  # Derived read-only aggregates


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    schema: type[pa.DataFrameModel]
    version: str
    role: DataRole
    description: str


class SchemaRegistry:
    """
    Centralized registry for all data schemas.

    Maps dataset names to their schemas and data roles.
    """

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "layoffs_raw": SchemaInfo(
            name="layoffs_raw",
            schema=RawLayoffSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Raw layoff extract, all columns as text",
        ),
        "layoffs_canonical": SchemaInfo(
            name="layoffs_canonical",
            schema=CanonicalLayoffSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Deduplicated, normalized and typed layoff records",
        ),
        "company_year_rank": SchemaInfo(
            name="company_year_rank",
            schema=CompanyYearRankSchema,
            version="1.0.0",
            role=DataRole.REPORT,
            description="Dense-ranked company totals per year",
        ),
    }

    @classmethod
    def get(cls, name: str) -> type[pa.DataFrameModel]:
        """
        Get a schema by name.

        Args:
            name: Schema identifier.

        Returns:
            The Pandera DataFrameModel class.

        Raises:
            KeyError: If schema not found.
        """
        return cls.get_info(name).schema

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get full schema info by name.

        Args:
            name: Schema identifier.

        Returns:
            SchemaInfo with metadata.
        """
        if name not in cls._schemas:
            available = ", ".join(cls._schemas.keys())
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def validate(
        cls, df: "pd.DataFrame", schema_name: str, *, lazy: bool = False
    ) -> "pd.DataFrame":
        """
        Validate a DataFrame against a registered schema.

        Args:
            df: DataFrame to validate.
            schema_name: Name of schema to validate against.
            lazy: Collect every failure instead of stopping at the first.

        Returns:
            Validated DataFrame.

        Raises:
            pandera.errors.SchemaError: If validation fails.
            pandera.errors.SchemaErrors: If a strict schema fails in several ways.
        """
        schema = cls.get(schema_name)
        return schema.validate(df, lazy=lazy)
