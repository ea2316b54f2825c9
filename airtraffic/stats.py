"""
Order statistics over a numeric column.

Two estimators are provided:

- `median`: exact-rank median. Nulls are dropped, the values sorted, and the
  element at 1-indexed rank ceil(N/2) returned. There is no interpolation, so
  for an even N the lower of the two middle values is returned
  (median([1, 2, 3, 4]) == 2, not 2.5).

- `percentile`: approximate nearest-rank estimator. The sorted values are
  thinned to a summary that keeps every k-th element, k = ceil(N / accuracy),
  plus the maximum. The estimate is the first summary element at or above the
  exact nearest rank ceil(p * N). The returned value is always an element of
  the input, never decreases as p grows, and its rank is within k - 1 of the
  exact nearest rank. With N <= accuracy the estimate is exact.
"""

import logging
import math

import numpy as np
import pandas as pd

from airtraffic.config import PERCENTILE_ACCURACY
from airtraffic.errors import EmptyResultError, InvalidInputError

logger = logging.getLogger(__name__)


def _sorted_values(values) -> np.ndarray:
    series = pd.Series(values).dropna()
    if series.empty:
        raise EmptyResultError("No non-null values to rank.")
    return np.sort(series.to_numpy(dtype='float64'), kind='mergesort')


def _nearest_rank(n: int, p: float) -> int:
    return min(n, max(1, math.ceil(p * n)))


def exact_rank(values, p: float) -> float:
    """
    Exact nearest-rank order statistic: the element at rank ceil(p * N).

    Args:
        values: Iterable or Series of numbers; nulls are ignored.
        p: Quantile in (0, 1].

    Returns:
        The selected value as a float.
    """
    if not 0 < p <= 1:
        raise InvalidInputError(f"Quantile must be in (0, 1], got {p}")
    ordered = _sorted_values(values)
    return float(ordered[_nearest_rank(len(ordered), p) - 1])


def median(values) -> float:
    """Exact-rank median (rank ceil(N/2), no interpolation)."""
    return exact_rank(values, 0.5)


def percentile(values, p: float, accuracy: int = PERCENTILE_ACCURACY) -> float:
    """
    Approximate nearest-rank percentile.

    Args:
        values: Iterable or Series of numbers; nulls are ignored.
        p: Quantile in (0, 1).
        accuracy: Summary size. The rank error is below ceil(N / accuracy).

    Returns:
        The estimated value as a float.

    Raises:
        InvalidInputError: If p is outside (0, 1) or accuracy is not positive.
        EmptyResultError: If there are no non-null values.
    """
    if not 0 < p < 1:
        raise InvalidInputError(f"Percentile must be in (0, 1), got {p}")
    if accuracy <= 0:
        raise InvalidInputError(f"Accuracy must be positive, got {accuracy}")

    ordered = _sorted_values(values)
    n = len(ordered)

    # Summary keeps ranks k, 2k, 3k, ... and n
    step = math.ceil(n / accuracy)
    target = _nearest_rank(n, p)
    rank = min(n, math.ceil(target / step) * step)
    logger.debug("percentile p=%s over %d values: summary step %d, rank %d", p, n, step, rank)

    return float(ordered[rank - 1])
