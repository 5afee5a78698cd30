"""
Deterministic hashing utilities.

Provides content-based fingerprints for DataFrames and configurations
so that two runs over the same input can be compared.
"""

import hashlib
from typing import Any

import pandas as pd


def hash_dataframe(
    df: pd.DataFrame,
    columns: list[str] | None = None,
) -> str:
    """
    Compute a deterministic hash of a DataFrame.

    Row order, column names and cell values all contribute; the index
    does not.

    Args:
        df: DataFrame to hash.
        columns: Optional subset of columns to include.

    Returns:
        Hex digest string (16 characters).
    """
    if columns:
        df = df[columns]

    hasher = hashlib.sha256()
    hasher.update(f"{df.shape}".encode())
    hasher.update(",".join(map(str, df.columns)).encode())
    hasher.update(pd.util.hash_pandas_object(df, index=False).to_numpy().tobytes())
    return hasher.hexdigest()[:16]


def hash_config(config: Any) -> str:
    """
    Compute hash of a configuration object.

    Args:
        config: Pydantic model or any object with a stable repr.

    Returns:
        Hex digest string (12 characters).
    """
    if hasattr(config, "model_dump_json"):
        config_str = config.model_dump_json()
    else:
        config_str = str(config)

    return hashlib.sha256(config_str.encode()).hexdigest()[:12]

