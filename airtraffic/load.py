import logging
import os

import pandas as pd

from airtraffic.config import AIRPORTS_CSV, CARRIERS_CSV, FLIGHTS_CSV, NULL_VALUE
from airtraffic.errors import InvalidInputError, require_columns, require_rows
from airtraffic.schema import (
    AIRPORT_COLUMNS, CARRIER_COLUMNS, FLIGHT_COLUMNS, NUMERIC_FLIGHT_COLUMNS, STRING_FLIGHT_COLUMNS,
    RecordStore
)

logger = logging.getLogger(__name__)


def _check_exists(path):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")


def _to_nullable_int(series: pd.Series) -> pd.Series:
    """
    Converts a column of numeric strings to pandas' nullable Int64.
    Raises InvalidInputError on any value that is not a whole number.
    """
    numbers = pd.to_numeric(series, errors='coerce')
    malformed = (series.notna() & numbers.isna()) | (numbers.notna() & (numbers % 1 != 0))
    if malformed.any():
        rows = malformed[malformed].index[:5].tolist()
        raise InvalidInputError(
            f"Malformed value(s) in numeric column '{series.name}' at rows {rows}: "
            f"{series[malformed].head(5).tolist()}"
        )
    return numbers.astype('Int64')


def load_flights(path: str = FLIGHTS_CSV) -> pd.DataFrame:
    """
    Loads the flight records CSV into a typed DataFrame.

    The missing-value sentinel ('NA') becomes <NA> in numeric columns,
    which are cast to nullable Int64. String columns are kept as they are,
    so an empty TailNum stays an empty string.

    Args:
        path: Path to the flights CSV file (with header).

    Returns:
        A DataFrame with the columns of schema.FLIGHT_COLUMNS.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If the file has no rows, a column is missing, or a
            numeric value is malformed.
    """
    _check_exists(path)
    logger.info("Loading flight records from %s", path)

    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        na_values={col: [NULL_VALUE] for col in NUMERIC_FLIGHT_COLUMNS},
        low_memory=False,
    )
    require_columns(df, *FLIGHT_COLUMNS)
    require_rows(df, 'flights table')
    df = df[FLIGHT_COLUMNS].copy()
    df[STRING_FLIGHT_COLUMNS] = df[STRING_FLIGHT_COLUMNS].astype(object)

    for col in NUMERIC_FLIGHT_COLUMNS:
        df[col] = _to_nullable_int(df[col])

    logger.info("Loaded %d flight records", len(df))
    return df


def load_carriers(path: str = CARRIERS_CSV) -> pd.DataFrame:
    """Loads the carriers reference table (Code, Description)."""
    _check_exists(path)
    logger.info("Loading carriers from %s", path)
    df = pd.read_csv(path, dtype={'Code': str, 'Description': str}, keep_default_na=False)
    require_columns(df, *CARRIER_COLUMNS)
    logger.info("Loaded %d carriers", len(df))
    return df


def load_airports(path: str = AIRPORTS_CSV) -> pd.DataFrame:
    """Loads the airports reference table (iata, airport, city, ...)."""
    _check_exists(path)
    logger.info("Loading airports from %s", path)
    df = pd.read_csv(
        path,
        dtype={'iata': str, 'airport': str, 'city': str, 'state': str, 'country': str},
        keep_default_na=False,
        na_values={'lat': [NULL_VALUE, ''], 'long': [NULL_VALUE, '']},
    )
    require_columns(df, 'iata', 'airport', 'city')
    for col in AIRPORT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    logger.info("Loaded %d airports", len(df))
    return df


def load_store(flights_path: str = FLIGHTS_CSV, carriers_path: str = CARRIERS_CSV,
               airports_path: str = AIRPORTS_CSV) -> RecordStore:
    """
    Loads all three tables and wraps them in a RecordStore.
    """
    return RecordStore(
        flights=load_flights(flights_path),
        carriers=load_carriers(carriers_path),
        airports=load_airports(airports_path),
    )
