"""
Configuration management with typed Pydantic models.

Provides project-scoped paths and the cleaning rules applied
by the normalizer.
"""

from layoffs.config.loader import load_config
from layoffs.config.settings import (
    LAYOFF_COLUMNS,
    CleaningConfig,
    DataPathsConfig,
    OutputConfig,
    PipelineConfig,
    ReportingConfig,
)

__all__ = [
    "LAYOFF_COLUMNS",
    "CleaningConfig",
    "DataPathsConfig",
    "OutputConfig",
    "PipelineConfig",
    "ReportingConfig",
    "load_config",
]
