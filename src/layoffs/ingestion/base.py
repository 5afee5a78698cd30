"""
Base class for layoffs loaders.

A loader knows where its CSV lives and how to read it; checking the
result against a Pandera schema is shared here.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from layoffs.config.settings import PipelineConfig
from layoffs.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Reads one layoffs CSV and checks it against a schema.

    Subclasses name the file through `source_path` and read it in `_read`.
    """

    def __init__(self, config: PipelineConfig, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            config: Pipeline configuration.
            schema: Pandera schema the loaded frame must satisfy.
        """
        self.config = config
        self.schema = schema

    @property
    @abstractmethod
    def source_path(self) -> Path:
        """CSV file this loader reads."""

    @abstractmethod
    def _read(self, path: Path) -> pd.DataFrame:
        """Read the CSV at path."""

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Read the source file and optionally validate it.

        Args:
            validate: Whether to validate against the loader's schema.

        Returns:
            Loaded DataFrame.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If the file cannot be parsed.
            pandera.errors.SchemaError: If validation fails.
            pandera.errors.SchemaErrors: If a strict schema fails in several ways.
        """
        path = self.source_path
        df = self._read(path)
        log.info(
            "Loaded layoffs file",
            loader=type(self).__name__,
            path=str(path),
            rows=len(df),
        )

        if validate:
            df = self.schema.validate(df)
            log.info("Schema validation passed", schema=self.schema.__name__)

        return df
