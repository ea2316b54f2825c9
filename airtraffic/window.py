import logging
from typing import Sequence

import numpy as np
import pandas as pd

from airtraffic.aggregate import synthesize_dates
from airtraffic.config import DATE_COLUMNS, DEFAULT_RADIUS_DAYS
from airtraffic.errors import DivisionByZeroError, InvalidInputError, require_columns

logger = logging.getLogger(__name__)


def daily_totals(table: pd.DataFrame, value_col: str,
                 date_columns: Sequence[str] = DATE_COLUMNS) -> pd.DataFrame:
    """
    Sum and count of the non-null `value_col` entries for each distinct date.

    Every distinct date present in the table gets a row, even when all of its
    values are null (total 0, count 0). Rows without a valid date are ignored.

    Returns:
        A DataFrame with columns ['date', 'total', 'count'] ordered by date.
    """
    require_columns(table, value_col)
    frame = pd.DataFrame({
        'date': synthesize_dates(table, date_columns),
        'value': table[value_col].astype('float64'),
    }).dropna(subset=['date'])

    daily = frame.groupby('date').agg(
        total=('value', 'sum'),
        count=('value', 'count')
    ).reset_index()
    return daily.sort_values(by='date').reset_index(drop=True)


def moving_average(table: pd.DataFrame, value_col: str, radius_days: int = DEFAULT_RADIUS_DAYS,
                   date_columns: Sequence[str] = DATE_COLUMNS) -> pd.DataFrame:
    """
    Calendar-windowed moving average of a column.

    For every distinct date d present in the data, averages `value_col` over
    all rows dated within [d - radius_days, d + radius_days]. The window is
    measured in calendar days, so it crosses month and year boundaries.
    Near the edges of the data the window is truncated to the dates that
    exist; nothing is padded or reflected. Null values are left out of both
    the sum and the count.

    Args:
        table: DataFrame with the date columns and `value_col`.
        value_col: Column to average, e.g. 'DepDelay'.
        radius_days: Days on each side of the centre date (5 gives an 11-day window).
        date_columns: Names of the (year, month, day) columns.

    Returns:
        A DataFrame with columns ['date', 'movingAverage']; 'date' is a
        'YYYY-MM-DD' string, rows sorted by date ascending.

    Raises:
        InvalidInputError: If radius_days is negative.
        DivisionByZeroError: If a window holds no non-null values.
    """
    if radius_days < 0:
        raise InvalidInputError(f"radius_days must be non-negative, got {radius_days}")

    daily = daily_totals(table, value_col, date_columns)
    days = daily['date'].to_numpy(dtype='datetime64[D]')
    radius = np.timedelta64(radius_days, 'D')

    # Window bounds as positions in the sorted distinct dates
    lower = np.searchsorted(days, days - radius, side='left')
    upper = np.searchsorted(days, days + radius, side='right')

    total_prefix = np.concatenate(([0.0], np.cumsum(daily['total'].to_numpy(dtype='float64'))))
    count_prefix = np.concatenate(([0], np.cumsum(daily['count'].to_numpy(dtype='int64'))))
    window_total = total_prefix[upper] - total_prefix[lower]
    window_count = count_prefix[upper] - count_prefix[lower]

    empty = window_count == 0
    if empty.any():
        raise DivisionByZeroError(
            f"No non-null '{value_col}' values within {radius_days} days of "
            f"{daily.loc[empty, 'date'].dt.strftime('%Y-%m-%d').tolist()}"
        )

    logger.debug("Moving average over %d distinct dates", len(daily))
    return pd.DataFrame({
        'date': daily['date'].dt.strftime('%Y-%m-%d'),
        'movingAverage': window_total / window_count,
    })
