"""
Error taxonomy for the air traffic statistics engine.

Every failure is raised synchronously to the caller of the offending
operation. Computations are pure, so none of these are ever retried.
"""


class AirTrafficError(Exception):
    """Base class for all errors raised by the engine."""


class InvalidInputError(AirTrafficError, ValueError):
    """A referenced column is missing, an argument is out of range,
    or a table is empty where a non-empty result is required."""


class DivisionByZeroError(AirTrafficError, ZeroDivisionError):
    """A ratio or average was requested over a zero-count denominator."""


class InsufficientDataError(AirTrafficError):
    """A regression fit has fewer than two distinct predictor values."""


class EmptyResultError(AirTrafficError):
    """A median or percentile was requested over zero non-null values."""


def require_columns(df, *columns):
    """
    Raises InvalidInputError unless every column exists in the DataFrame.
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise InvalidInputError(
            f"Missing required columns: {missing}. Available columns: {list(df.columns)}"
        )


def require_rows(df, what: str = "table"):
    if df.empty:
        raise InvalidInputError(f"The {what} is empty; a non-empty result is required.")
