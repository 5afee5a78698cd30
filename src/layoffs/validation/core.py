"""
Core validation logic for data files.

Validates the raw extract and the canonical table against their
registered Pandera schemas.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
import pandera.pandas as pa

from layoffs.config.settings import PipelineConfig
from layoffs.ingestion.layoffs import read_canonical_layoffs, read_raw_layoffs
from layoffs.schemas.registry import SchemaRegistry
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single dataset."""

    dataset_name: str
    schema_name: str | None
    file_path: Path
    exists: bool
    schema_valid: bool | None
    row_count: int | None
    error_message: str | None


# Mapping from dataset names to schema names
DATASET_SCHEMA_MAP: dict[str, str] = {
    "raw_layoffs": "layoffs_raw",
    "canonical_layoffs": "layoffs_canonical",
}


class ValidationRunner:
    """
    Runs validation for the raw extract and the canonical table.

    Validates data files against their registered schemas and reports results.
    """

    def __init__(self, config: PipelineConfig, canonical_path: Path | None = None) -> None:
        """
        Initialize validation runner.

        Args:
            config: Pipeline configuration containing data paths.
            canonical_path: Canonical CSV to check. Defaults to the project's
                canonical path.
        """
        self.config = config
        self.canonical_path = canonical_path or config.canonical_path

    def run(self) -> list[ValidationResult]:
        """
        Run validation for all datasets.

        Returns:
            List of validation results, one per dataset.
        """
        encoding = self.config.data_paths.encoding
        return [
            self._validate_dataset(
                "raw_layoffs",
                self.config.raw_path,
                lambda path: read_raw_layoffs(path, encoding=encoding),
            ),
            self._validate_dataset(
                "canonical_layoffs",
                self.canonical_path,
                read_canonical_layoffs,
            ),
        ]

    def _validate_dataset(
        self,
        dataset_name: str,
        file_path: Path,
        reader: Callable[[Path], pd.DataFrame],
    ) -> ValidationResult:
        """
        Validate a single dataset.

        Args:
            dataset_name: Key in DATASET_SCHEMA_MAP.
            file_path: File to validate.
            reader: Function loading the file into a DataFrame.

        Returns:
            ValidationResult for the dataset.
        """
        schema_name = DATASET_SCHEMA_MAP[dataset_name]

        if not file_path.exists():
            log.warning("Data file not found", dataset=dataset_name, path=str(file_path))
            return ValidationResult(
                dataset_name=dataset_name,
                schema_name=schema_name,
                file_path=file_path,
                exists=False,
                schema_valid=None,
                row_count=None,
                error_message="File not found",
            )

        row_count: int | None = None
        try:
            df = reader(file_path)
            row_count = len(df)

            SchemaRegistry.validate(df, schema_name, lazy=True)

            log.info(
                "Validation passed",
                dataset=dataset_name,
                schema=schema_name,
                schema_version=SchemaRegistry.get_info(schema_name).version,
                rows=row_count,
            )
            return ValidationResult(
                dataset_name=dataset_name,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=True,
                row_count=row_count,
                error_message=None,
            )

        except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
            error_msg = self._format_schema_error(e)
            log.error(
                "Schema validation failed",
                dataset=dataset_name,
                schema=schema_name,
                error=error_msg,
            )
            return ValidationResult(
                dataset_name=dataset_name,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=row_count,
                error_message=error_msg,
            )

        except (ValueError, OSError) as e:
            error_msg = f"{type(e).__name__}: {e!s}"
            log.error("Validation error", dataset=dataset_name, error=error_msg)
            return ValidationResult(
                dataset_name=dataset_name,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=row_count,
                error_message=error_msg,
            )

    def _format_schema_error(
        self, error: pa.errors.SchemaError | pa.errors.SchemaErrors
    ) -> str:
        """
        Format schema error for user-friendly display.

        Args:
            error: Pandera SchemaError or SchemaErrors.

        Returns:
            Formatted error message (first 5 violations).
        """
        failures = getattr(error, "failure_cases", None)
        if isinstance(failures, pd.DataFrame):
            n_failures = len(failures)
            if n_failures > 5:
                failures_str = failures.head(5).to_string(index=False)
                return f"{n_failures} validation errors (showing first 5):\n{failures_str}"
            return f"{n_failures} validation error(s):\n{failures.to_string(index=False)}"

        return str(error).split("\n")[0][:200]
