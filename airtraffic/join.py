from typing import Iterable

import pandas as pd

from airtraffic.errors import require_columns


def inner_join(left: pd.DataFrame, right: pd.DataFrame, left_key: str, right_key: str) -> pd.DataFrame:
    """
    Equality join producing one row per matching (left, right) pair.

    Unmatched rows on either side are dropped. String keys match exactly
    and case-sensitively; null keys never match.

    Args:
        left: Left DataFrame.
        right: Right DataFrame.
        left_key: Join column in `left`.
        right_key: Join column in `right`.

    Returns:
        The joined DataFrame with the columns of both sides.
    """
    require_columns(left, left_key)
    require_columns(right, right_key)

    left = left.loc[left[left_key].notna()]
    right = right.loc[right[right_key].notna()]
    return pd.merge(left, right, left_on=left_key, right_on=right_key, how='inner')


def anti_join(table: pd.DataFrame, excluded_keys: Iterable, key: str) -> pd.DataFrame:
    """
    Rows of `table` whose `key` value is not one of `excluded_keys`.
    """
    require_columns(table, key)
    excluded = set(excluded_keys)
    return table.loc[~table[key].isin(excluded)]
