import logging
from datetime import date, datetime
from typing import Sequence, Union

import pandas as pd

from airtraffic.config import DATE_COLUMNS
from airtraffic.errors import DivisionByZeroError, require_columns

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, pd.Timestamp]


def count_by(table: pd.DataFrame, key: str) -> pd.DataFrame:
    """
    Counts rows per value of a key column.

    Null keys are not counted and produce no group.

    Args:
        table: Any DataFrame containing `key`.
        key: The column to group by.

    Returns:
        A DataFrame with columns [key, 'count'], sorted by count descending
        and then by key ascending.
    """
    require_columns(table, key)

    counts = table.groupby(key, dropna=True).size().reset_index(name='count')
    counts['count'] = counts['count'].astype('int64')

    # Stable sort: ties keep the ascending key order produced by groupby
    counts = counts.sort_values(by='count', ascending=False, kind='mergesort')
    return counts.reset_index(drop=True)


def filter_equals(table: pd.DataFrame, column: str, value) -> pd.DataFrame:
    """
    Selects the rows where `column` equals `value`. Nulls never match.
    """
    require_columns(table, column)
    mask = table[column].eq(value).fillna(False).astype(bool)
    return table.loc[mask]


def synthesize_dates(table: pd.DataFrame, date_columns: Sequence[str] = DATE_COLUMNS) -> pd.Series:
    """
    Builds a calendar date per row from its year, month and day columns.

    Rows with a missing or impossible date get NaT.

    Args:
        table: DataFrame holding the three date columns.
        date_columns: Names of the (year, month, day) columns.

    Returns:
        A datetime64 Series aligned with `table`.
    """
    require_columns(table, *date_columns)
    year_col, month_col, day_col = date_columns
    dates = pd.Series(pd.NaT, index=table.index, dtype='datetime64[ns]')

    valid = table[list(date_columns)].notna().all(axis=1)
    if valid.any():
        parts = pd.DataFrame({
            'year': table.loc[valid, year_col].astype('int64'),
            'month': table.loc[valid, month_col].astype('int64'),
            'day': table.loc[valid, day_col].astype('int64'),
        })
        dates.loc[valid] = pd.to_datetime(parts, errors='coerce')
    return dates


def filter_range(table: pd.DataFrame, start: DateLike, end: DateLike,
                 date_columns: Sequence[str] = DATE_COLUMNS) -> pd.DataFrame:
    """
    Selects the rows whose synthesized date lies in [start, end], inclusive on both ends.
    """
    dates = synthesize_dates(table, date_columns)
    mask = dates.between(pd.Timestamp(start), pd.Timestamp(end), inclusive='both')
    return table.loc[mask]


def ratio_by_group(table: pd.DataFrame, key: str, numerator_col: str,
                   denominator_count_col: str, name: str = 'ratio') -> pd.DataFrame:
    """
    Computes sum(numerator_col) / count(denominator_count_col) per group.

    Only non-null values are summed and counted.

    Args:
        table: The DataFrame to aggregate.
        key: The grouping column.
        numerator_col: Column whose values are summed.
        denominator_count_col: Column whose non-null values are counted.
        name: Name of the output ratio column.

    Returns:
        A DataFrame with columns [key, name], ordered by key ascending.

    Raises:
        DivisionByZeroError: If a group has no non-null denominator values.
    """
    require_columns(table, key, numerator_col, denominator_count_col)

    grouped = table.groupby(key, dropna=True).agg(
        numerator=(numerator_col, 'sum'),
        denominator=(denominator_count_col, 'count')
    ).reset_index()

    empty = grouped.loc[grouped['denominator'] == 0, key]
    if not empty.empty:
        raise DivisionByZeroError(
            f"No non-null '{denominator_count_col}' values for {key} {empty.tolist()}"
        )

    grouped[name] = grouped['numerator'].astype('float64') / grouped['denominator'].astype('float64')
    return grouped[[key, name]]


def average_of_two_directed_sums(table: pd.DataFrame, key_a: str, val_a: str,
                                 key_b: str, val_b: str, key_name: str = 'airport',
                                 value_name: str = 'taxi', skip_empty: bool = False) -> pd.DataFrame:
    """
    Averages two values that are attributed to different keys of the same row.

    `val_a` is summed and counted per `key_a`, `val_b` per `key_b`; the two
    partial aggregates are merged per key value, and the merged sum is
    divided by the merged count. Each side counts its own non-null values.

    Args:
        table: The flights DataFrame.
        key_a, val_a: First (key, value) pair, e.g. ('Origin', 'TaxiIn').
        key_b, val_b: Second (key, value) pair, e.g. ('Dest', 'TaxiOut').
        key_name: Name of the merged key column.
        value_name: Name of the average column.
        skip_empty: Drop keys with no non-null values instead of failing.

    Returns:
        A DataFrame with columns [key_name, value_name], sorted by the average
        ascending and then by key ascending.

    Raises:
        DivisionByZeroError: If a key has no non-null values and skip_empty is False.
    """
    require_columns(table, key_a, val_a, key_b, val_b)

    # --- Per-side partial aggregates ---
    side_a = table.groupby(key_a, dropna=True).agg(
        total_a=(val_a, 'sum'),
        count_a=(val_a, 'count')
    ).rename_axis(key_name).reset_index()

    side_b = table.groupby(key_b, dropna=True).agg(
        total_b=(val_b, 'sum'),
        count_b=(val_b, 'count')
    ).rename_axis(key_name).reset_index()

    # --- Merge both sides on the key ---
    merged = pd.merge(side_a, side_b, on=key_name, how='outer')
    partials = ['total_a', 'count_a', 'total_b', 'count_b']
    merged[partials] = merged[partials].fillna(0)
    merged['total'] = merged['total_a'].astype('float64') + merged['total_b'].astype('float64')
    merged['count'] = merged['count_a'].astype('int64') + merged['count_b'].astype('int64')

    empty = merged['count'] == 0
    if empty.any():
        if not skip_empty:
            raise DivisionByZeroError(
                f"No non-null '{val_a}'/'{val_b}' values for {key_name} "
                f"{merged.loc[empty, key_name].tolist()}"
            )
        logger.debug("Dropping %d %s value(s) with no data", int(empty.sum()), key_name)
        merged = merged.loc[~empty]

    merged[value_name] = merged['total'] / merged['count']
    merged = merged.sort_values(by=[value_name, key_name], ascending=[True, True], kind='mergesort')
    return merged[[key_name, value_name]].reset_index(drop=True)
