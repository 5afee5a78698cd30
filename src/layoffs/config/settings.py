"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Cleaning rules (sentinels, prefixes, date format) live in config rather
than in processing code.
"""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column order of the raw extract and of the canonical table
LAYOFF_COLUMNS: tuple[str, ...] = (
    "company",
    "location",
    "industry",
    "total_laid_off",
    "percentage_laid_off",
    "date",
    "stage",
    "country",
    "funds_raised_millions",
)

# Columns holding free text in the canonical table
TEXT_COLUMNS: tuple[str, ...] = (
    "company",
    "location",
    "industry",
    "percentage_laid_off",
    "stage",
    "country",
)

# Whole-number measures
COUNT_COLUMNS: tuple[str, ...] = ("total_laid_off", "funds_raised_millions")

# Measures where the exact measure sentinel is cleared before typing
MEASURE_COLUMNS: tuple[str, ...] = (
    "total_laid_off",
    "percentage_laid_off",
    "funds_raised_millions",
)


class DataPathsConfig(BaseModel):
    """Data file paths configuration.

    All paths are relative to data_root. Use resolve() to get absolute paths.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("./data"), description="Root directory for all data files"
    )
    raw_layoffs: Path = Field(description="Path to the raw layoffs CSV extract")
    encoding: str = Field(default="utf-8", description="Text encoding of the raw CSV")

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class CleaningConfig(BaseModel):
    """Rules applied by the normalizer."""

    model_config = ConfigDict(frozen=True)

    measure_sentinel: str = Field(
        default="none",
        description="Exact text meaning 'absent' in the numeric columns",
    )
    text_sentinel: str = Field(
        default="none",
        description="Text meaning 'absent' in any textual column (case-insensitive)",
    )
    date_format: str = Field(default="%m/%d/%Y", description="strptime format of dates")
    date_sentinel: str = Field(
        default="None", description="Exact text meaning 'no date'"
    )
    trim_columns: list[str] = Field(
        default_factory=lambda: ["company"],
        description="Columns stripped of surrounding whitespace",
    )
    industry_prefixes: dict[str, str] = Field(
        default_factory=lambda: {"Crypto": "Crypto"},
        description="Prefix -> canonical industry label (case-sensitive)",
    )
    country_prefixes: list[str] = Field(
        default_factory=lambda: ["United States"],
        description="Countries whose trailing periods are stripped",
    )
    backfill_keys: list[str] = Field(
        default_factory=lambda: ["company", "location"],
        description="Join key used to backfill missing industries",
    )

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Ensure the date format contains at least one directive."""
        if "%" not in v:
            msg = f"date_format must be a strptime format, got: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("measure_sentinel", "text_sentinel", "date_sentinel")
    @classmethod
    def validate_sentinel(cls, v: str) -> str:
        """Sentinels must be non-blank."""
        if not v.strip():
            msg = "Sentinel values must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("backfill_keys", "trim_columns")
    @classmethod
    def validate_columns(cls, v: list[str]) -> list[str]:
        """Only known layoff columns may be referenced."""
        unknown = [col for col in v if col not in LAYOFF_COLUMNS]
        if unknown:
            msg = f"Unknown columns: {unknown}"
            raise ValueError(msg)
        return v


class ReportingConfig(BaseModel):
    """Exploratory reporting configuration."""

    model_config = ConfigDict(frozen=True)

    top_n: int = Field(default=5, ge=1, le=100, description="Companies ranked per year")
    plots: bool = Field(default=True, description="Embed charts in the HTML report")


class OutputConfig(BaseModel):
    """Output paths configuration.

    Paths are derived from output_root and project name.
    Structure: ./output/{project}/layoffs_clean.csv, ./output/{project}/reports
    """

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(
        default=Path("./output"), description="Root directory for all outputs"
    )


class PipelineConfig(BaseModel):
    """Complete pipeline configuration.

    The project name drives the output directory structure: ./output/{project}/
    """

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'layoffs-2023')")

    data_paths: DataPathsConfig
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def raw_path(self) -> Path:
        """Resolved path of the raw extract."""
        return self.data_paths.resolve("raw_layoffs")

    @property
    def output_dir(self) -> Path:
        """Path to the project output directory."""
        return self.output.output_root / self.project

    @property
    def canonical_path(self) -> Path:
        """Default path of the canonical CSV."""
        return self.output_dir / "layoffs_clean.csv"

    @property
    def reports_dir(self) -> Path:
        """Path to the reports output directory."""
        return self.output_dir / "reports"

    def report_path(self, when: datetime | None = None) -> Path:
        """Timestamped path for an HTML report."""
        stamp = (when or datetime.now()).strftime("%Y%m%d_%H%M%S")
        return self.reports_dir / f"layoffs_report_{stamp}.html"
