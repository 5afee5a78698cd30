"""
Pandera schemas for layoff records.

The raw schema is the contract of the source extract (everything is text);
the canonical schema is the contract of the pipeline output.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series


class RawLayoffSchema(pa.DataFrameModel):
    """
    Schema for the raw layoffs extract.

    No typing is assumed: every column arrives as text and sentinels such as
    'none' are still present.
    """

    company: Series[pd.StringDtype] = pa.Field(nullable=True, description="Company name")
    location: Series[pd.StringDtype] = pa.Field(nullable=True, description="City or metro area")
    industry: Series[pd.StringDtype] = pa.Field(nullable=True, description="Industry label")
    total_laid_off: Series[pd.StringDtype] = pa.Field(
        nullable=True, description="Headcount laid off, as text"
    )
    percentage_laid_off: Series[pd.StringDtype] = pa.Field(
        nullable=True, description="Fraction of staff laid off, as text"
    )
    date: Series[pd.StringDtype] = pa.Field(nullable=True, description="MM/DD/YYYY text")
    stage: Series[pd.StringDtype] = pa.Field(nullable=True, description="Funding stage")
    country: Series[pd.StringDtype] = pa.Field(nullable=True, description="Country name")
    funds_raised_millions: Series[pd.StringDtype] = pa.Field(
        nullable=True, description="Funds raised in millions, as text"
    )

    class Config:
        """Schema configuration."""

        name = "RawLayoffSchema"
        strict = False  # Allow extra columns
        coerce = True


class CanonicalLayoffSchema(pa.DataFrameModel):
    """
    Schema for the canonical layoffs table.

    Numeric measures are nullable integers, dates are typed, and every row
    carries at least one of the two layoff measures.
    """

    company: Series[pd.StringDtype] = pa.Field(nullable=True)
    location: Series[pd.StringDtype] = pa.Field(nullable=True)
    industry: Series[pd.StringDtype] = pa.Field(nullable=True)
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(
        ge=0,
        nullable=True,
        description="Headcount laid off",
    )
    percentage_laid_off: Series[pd.StringDtype] = pa.Field(
        nullable=True,
        description="Fraction of staff laid off, kept as text as reported",
    )
    date: Series[pa.DateTime] = pa.Field(nullable=True, description="Event date")
    stage: Series[pd.StringDtype] = pa.Field(nullable=True)
    country: Series[pd.StringDtype] = pa.Field(nullable=True)
    funds_raised_millions: Series[pd.Int64Dtype] = pa.Field(
        ge=0,
        nullable=True,
        description="Funds raised in millions",
    )

    @pa.check("percentage_laid_off", name="fraction_in_unit_interval", raise_warning=True)
    @classmethod
    def percentage_is_fraction(cls, series: Series[pd.StringDtype]) -> Series[bool]:
        """Percentages should parse as numbers between 0 and 1; others only warn."""
        values = pd.to_numeric(series, errors="coerce")
        return (values >= 0) & (values <= 1)

    @pa.dataframe_check(name="has_layoff_measure")
    @classmethod
    def has_layoff_measure(cls, df: pd.DataFrame) -> Series[bool]:
        """Rows need a headcount or a percentage."""
        return df["total_laid_off"].notna() | df["percentage_laid_off"].notna()

    class Config:
        """Schema configuration."""

        name = "CanonicalLayoffSchema"
        strict = True
        coerce = True
        ordered = True


class CompanyYearRankSchema(pa.DataFrameModel):
    """Schema for the per-year company ranking report."""

    company: Series[pd.StringDtype] = pa.Field(nullable=True)
    year: Series[pd.Int64Dtype] = pa.Field(ge=1900, le=2100)
    total_laid_off: Series[pd.Int64Dtype] = pa.Field(ge=0, nullable=True)
    ranking: Series[pd.Int64Dtype] = pa.Field(ge=1)

    class Config:
        """Schema configuration."""

        name = "CompanyYearRankSchema"
        strict = False
        coerce = True
