"""Partitioned ranking helpers."""

import numpy as np
import pandas as pd


def dense_rank(
    df: pd.DataFrame,
    partition_by: str | list[str],
    order_by: str,
    *,
    ascending: bool = False,
    rank_column: str = "ranking",
) -> pd.DataFrame:
    """
    Dense-rank rows within each partition.

    Tied values share a rank and the next distinct value takes the next
    integer, so ranks have no gaps. Missing values rank after every
    present value of their partition.

    Args:
        df: Rows to rank.
        partition_by: Partition column(s).
        order_by: Numeric column to rank on.
        ascending: Rank smallest first instead of largest first.
        rank_column: Name of the added rank column.

    Returns:
        Copy of df with an Int64 rank column.
    """
    keys = [partition_by] if isinstance(partition_by, str) else list(partition_by)
    df = df.copy()
    if df.empty:
        df[rank_column] = pd.Series(dtype="Int64")
        return df

    values = pd.Series(
        df[order_by].astype("Float64").to_numpy(dtype="float64", na_value=np.nan),
        index=df.index,
    )
    ranks = values.groupby([df[key] for key in keys], sort=False, dropna=False).rank(
        method="dense",
        ascending=ascending,
        na_option="bottom",
    )
    df[rank_column] = ranks.astype("Int64")
    return df
