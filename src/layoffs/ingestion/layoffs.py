"""
Layoffs extract ingestion.

Loads the raw extract as untyped text and re-reads canonical tables
written by the cleaning pipeline.
"""

from pathlib import Path

import pandas as pd

from layoffs.config.settings import (
    COUNT_COLUMNS,
    LAYOFF_COLUMNS,
    TEXT_COLUMNS,
    PipelineConfig,
)
from layoffs.ingestion.base import DataLoader
from layoffs.normalization.columns import normalize_columns, validate_required_columns
from layoffs.schemas.layoffs import CanonicalLayoffSchema, RawLayoffSchema
from layoffs.utils.logging import get_logger

log = get_logger(__name__)


def prepare_raw_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Bring a raw frame into the loader's working shape.

    Header variants are mapped to canonical names, the nine layoff columns
    are selected in canonical order and every value becomes text. Row
    order is preserved and nothing is cleaned.

    Args:
        df: Raw DataFrame with any header spelling.

    Returns:
        Working copy with string-typed canonical columns.

    Raises:
        ValueError: If a layoff column is missing.
    """
    df = normalize_columns(df)
    validate_required_columns(df, list(LAYOFF_COLUMNS))

    extra = [col for col in df.columns if col not in LAYOFF_COLUMNS]
    if extra:
        log.debug("Ignoring extra columns", columns=[str(c) for c in extra])

    working = df.loc[:, list(LAYOFF_COLUMNS)].astype("string")
    return working.reset_index(drop=True)


def read_raw_layoffs(path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """
    Read a raw layoffs CSV with every cell kept as text.

    Empty cells stay empty strings and sentinels stay literal, so later
    passes see exactly what the source contained.

    Args:
        path: CSV file path.
        encoding: Text encoding of the file.

    Returns:
        Working copy of the raw extract.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed as CSV.
    """
    if not path.exists():
        msg = f"Raw layoffs file not found: {path}"
        raise FileNotFoundError(msg)

    log.info("Loading raw layoffs", path=str(path))

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding=encoding,
            skipinitialspace=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        msg = f"Malformed raw layoffs file {path}: {e}"
        raise ValueError(msg) from e

    return prepare_raw_frame(df)


class RawLayoffsLoader(DataLoader[RawLayoffSchema]):
    """Loader for the raw layoffs extract."""

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize raw layoffs loader."""
        super().__init__(config, RawLayoffSchema)

    @property
    def source_path(self) -> Path:
        """Raw extract under the data root."""
        return self.config.raw_path

    def _read(self, path: Path) -> pd.DataFrame:
        """Read the raw CSV as text."""
        return read_raw_layoffs(path, encoding=self.config.data_paths.encoding)


class CanonicalLayoffsLoader(DataLoader[CanonicalLayoffSchema]):
    """Loader for canonical tables written by the cleaning pipeline."""

    def __init__(self, config: PipelineConfig, path: Path | None = None) -> None:
        """
        Initialize canonical layoffs loader.

        Args:
            config: Pipeline configuration.
            path: Explicit CSV path. Defaults to the project's canonical path.
        """
        super().__init__(config, CanonicalLayoffSchema)
        self.path = path or config.canonical_path

    @property
    def source_path(self) -> Path:
        """Canonical CSV to read."""
        return self.path

    def _read(self, path: Path) -> pd.DataFrame:
        """Read the canonical CSV with typed columns."""
        return read_canonical_layoffs(path)


def read_canonical_layoffs(path: Path) -> pd.DataFrame:
    """
    Read a canonical layoffs CSV and restore column types.

    Args:
        path: CSV file path.

    Returns:
        DataFrame in canonical column order and dtypes.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        msg = f"Canonical layoffs file not found: {path}"
        raise FileNotFoundError(msg)

    log.info("Loading canonical layoffs", path=str(path))

    dtypes: dict[str, str] = {col: "string" for col in TEXT_COLUMNS}
    dtypes.update({col: "Int64" for col in COUNT_COLUMNS})

    df = pd.read_csv(path, dtype=dtypes, parse_dates=["date"])
    validate_required_columns(df, list(LAYOFF_COLUMNS))
    df = df.loc[:, list(LAYOFF_COLUMNS)].copy()
    df["date"] = pd.to_datetime(df["date"]).astype("datetime64[ns]")
    return df


def load_raw_layoffs(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Load the configured raw extract.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against RawLayoffSchema.

    Returns:
        Raw working copy.
    """
    return RawLayoffsLoader(config).load(validate=validate)


def load_canonical_layoffs(
    config: PipelineConfig,
    path: Path | None = None,
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Load a canonical table written by the pipeline.

    Args:
        config: Pipeline configuration.
        path: Explicit CSV path. Defaults to the project's canonical path.
        validate: Whether to validate against CanonicalLayoffSchema.

    Returns:
        Canonical DataFrame.
    """
    return CanonicalLayoffsLoader(config, path).load(validate=validate)
