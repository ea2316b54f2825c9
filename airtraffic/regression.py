import logging
from typing import Tuple

import numpy as np
import pandas as pd

from airtraffic.errors import InsufficientDataError, require_columns

logger = logging.getLogger(__name__)


def grouped_means(table: pd.DataFrame, predictor_col: str, response_col: str) -> pd.DataFrame:
    """
    Reduces the table to one (x, ybar) pair per distinct predictor value.

    A row takes part only if both its predictor and its response are
    present and non-negative; the two conditions are applied to the same row.

    Returns:
        A DataFrame with columns ['x', 'ybar'] ordered by x.
    """
    require_columns(table, predictor_col, response_col)

    x = table[predictor_col]
    y = table[response_col]
    valid = (x.ge(0) & y.ge(0)).fillna(False).astype(bool)

    pairs = pd.DataFrame({
        'x': x.loc[valid].astype('float64'),
        'y': y.loc[valid].astype('float64'),
    })
    return pairs.groupby('x').agg(ybar=('y', 'mean')).reset_index()


def fit_linear(table: pd.DataFrame, predictor_col: str, response_col: str) -> Tuple[float, float]:
    """
    Ordinary least squares fit of y = c + b*x over the per-predictor mean responses.

    Args:
        table: DataFrame holding both columns.
        predictor_col: The x column; negative values are invalid.
        response_col: The y column; negative values are invalid.

    Returns:
        (c, b): the constant term and the slope.

    Raises:
        InsufficientDataError: If fewer than 2 distinct predictor values remain.
    """
    reduced = grouped_means(table, predictor_col, response_col)
    if len(reduced) < 2:
        raise InsufficientDataError(
            f"Need at least 2 distinct '{predictor_col}' values, found {len(reduced)}"
        )

    x = reduced['x'].to_numpy()
    ybar = reduced['ybar'].to_numpy()
    x_mean = x.mean()
    y_mean = ybar.mean()

    slope = np.sum((x - x_mean) * (ybar - y_mean)) / np.sum((x - x_mean) ** 2)
    intercept = y_mean - slope * x_mean
    logger.debug("Fitted %s ~ %s over %d distinct values", response_col, predictor_col, len(reduced))

    return float(intercept), float(slope)
