"""
The air traffic questions.

Each function takes a RecordStore, reads from it without modifying it, and
returns a new result table, a scalar, or a scalar pair.
"""

import logging
from typing import Tuple

import pandas as pd

from airtraffic.aggregate import (
    average_of_two_directed_sums, count_by, filter_equals, filter_range, ratio_by_group
)
from airtraffic.config import (
    DEFAULT_RADIUS_DAYS, PERCENTILE_ACCURACY, ROUTE_DEST, ROUTE_ORIGIN, SCORE_PERCENTILE,
    SECURITY_CANCELLATION_CODE, WEATHER_WINDOW
)
from airtraffic.errors import EmptyResultError, require_columns
from airtraffic.join import anti_join, inner_join
from airtraffic.regression import fit_linear
from airtraffic.schema import RecordStore
from airtraffic.stats import median, percentile
from airtraffic.window import moving_average

logger = logging.getLogger(__name__)


def flight_count(store: RecordStore) -> pd.DataFrame:
    """
    Number of flights per aircraft (TailNum), most active first.

    Returns:
        A DataFrame with columns ['TailNum', 'count'].
    """
    logger.info("Counting flights per aircraft...")
    return count_by(store.flights, 'TailNum')


def cancelled_due_to_security(store: RecordStore, code: str = SECURITY_CANCELLATION_CODE) -> pd.DataFrame:
    """
    Flights cancelled for security reasons.

    Returns:
        A DataFrame with columns ['FlightNum', 'Dest'].
    """
    logger.info("Finding flights cancelled with code %s...", code)
    flights = store.flights
    require_columns(flights, 'Cancelled', 'FlightNum', 'Dest')
    cancelled = filter_equals(flights, 'Cancelled', 1)
    security = filter_equals(cancelled, 'CancellationCode', code)
    return security[['FlightNum', 'Dest']].reset_index(drop=True)


def longest_weather_delay(store: RecordStore, start=WEATHER_WINDOW[0], end=WEATHER_WINDOW[1]) -> int:
    """
    The longest weather delay between two dates, both inclusive.

    Raises:
        EmptyResultError: If no flight in the range has a weather delay.
    """
    logger.info("Finding the longest weather delay between %s and %s...", start, end)
    require_columns(store.flights, 'WeatherDelay')
    delays = filter_range(store.flights, start, end)['WeatherDelay'].dropna()
    if delays.empty:
        raise EmptyResultError(f"No weather delays recorded between {start} and {end}")
    return int(delays.max())


def did_not_fly(store: RecordStore) -> pd.DataFrame:
    """
    Carriers with no flight in the flights table.

    Returns:
        A DataFrame with the column ['Description'].
    """
    logger.info("Finding carriers that did not fly...")
    require_columns(store.flights, 'UniqueCarrier')
    flown = store.flights['UniqueCarrier'].dropna().unique()
    idle = anti_join(store.carriers, flown, 'Code')
    return idle[['Description']].reset_index(drop=True)


def flights_on_route(store: RecordStore, origin: str = ROUTE_ORIGIN, dest: str = ROUTE_DEST) -> pd.DataFrame:
    """
    Carriers flying from `origin` to `dest`, ranked by number of flights.

    Returns:
        A DataFrame with columns ['Description', 'Num'], sorted by Num
        descending and then by Description ascending.
    """
    logger.info("Ranking carriers flying %s -> %s...", origin, dest)
    flights = store.flights
    route = filter_equals(filter_equals(flights, 'Origin', origin), 'Dest', dest)
    per_carrier = count_by(route, 'UniqueCarrier').rename(columns={'count': 'Num'})

    enriched = inner_join(store.carriers, per_carrier, 'Code', 'UniqueCarrier')
    enriched = enriched.sort_values(by=['Num', 'Description'], ascending=[False, True], kind='mergesort')
    return enriched[['Description', 'Num']].reset_index(drop=True)


def flights_from_vegas_to_jfk(store: RecordStore) -> pd.DataFrame:
    """Carriers flying from Las Vegas (LAS) to New York JFK, ranked by flights."""
    return flights_on_route(store, 'LAS', 'JFK')


def time_spent_taxiing(store: RecordStore) -> pd.DataFrame:
    """
    Average taxi time per airport, ascending.

    TaxiIn is attributed to the flight's Origin airport and TaxiOut to its
    Dest airport. Airports with no taxi data at all are left out.

    Returns:
        A DataFrame with columns ['airport', 'taxi'].
    """
    logger.info("Calculating average taxi time per airport...")
    return average_of_two_directed_sums(
        store.flights, 'Origin', 'TaxiIn', 'Dest', 'TaxiOut',
        key_name='airport', value_name='taxi', skip_empty=True
    )


def distance_median(store: RecordStore) -> float:
    """Exact-rank median of the travel distance."""
    logger.info("Calculating the median distance...")
    require_columns(store.flights, 'Distance')
    return median(store.flights['Distance'])


def score95(store: RecordStore, p: float = SCORE_PERCENTILE, accuracy: int = PERCENTILE_ACCURACY) -> float:
    """Carrier delay below which 95% of the (non-null) observations fall."""
    logger.info("Estimating the %s percentile of carrier delay...", p)
    require_columns(store.flights, 'CarrierDelay')
    return percentile(store.flights['CarrierDelay'], p, accuracy)


def cancelled_flights(store: RecordStore) -> pd.DataFrame:
    """
    Share of cancelled departures per origin airport, enriched with the
    airport's name and city.

    Airports without any cancellation are left out.

    Returns:
        A DataFrame with columns ['airport', 'city', 'percentage'], sorted by
        percentage descending and then by airport name descending.
    """
    logger.info("Calculating cancellation rates per airport...")
    rates = ratio_by_group(store.flights, 'Origin', 'Cancelled', 'Cancelled', name='percentage')

    enriched = inner_join(rates, store.airports, 'Origin', 'iata')
    enriched = enriched.loc[enriched['percentage'] > 0.0]
    enriched = enriched.sort_values(by=['percentage', 'airport'], ascending=[False, False], kind='mergesort')
    return enriched[['airport', 'city', 'percentage']].reset_index(drop=True)


def least_squares(store: RecordStore) -> Tuple[float, float]:
    """
    Linear fit WeatherDelay = c + b * DepDelay over the mean weather delay
    of each non-negative departure delay.

    Returns:
        (c, b): the constant term and the slope.
    """
    logger.info("Fitting weather delay against departure delay...")
    return fit_linear(store.flights, 'DepDelay', 'WeatherDelay')


def running_average(store: RecordStore, radius_days: int = DEFAULT_RADIUS_DAYS) -> pd.DataFrame:
    """
    Moving average of DepDelay over the days within `radius_days` of each date.

    Returns:
        A DataFrame with columns ['date', 'movingAverage'] ordered by date.
    """
    logger.info("Calculating the %d-day running average of departure delay...", 2 * radius_days + 1)
    return moving_average(store.flights, 'DepDelay', radius_days)


# Question name -> function, in presentation order
QUESTIONS = {
    'flight_count': flight_count,
    'cancelled_due_to_security': cancelled_due_to_security,
    'longest_weather_delay': longest_weather_delay,
    'did_not_fly': did_not_fly,
    'flights_from_vegas_to_jfk': flights_from_vegas_to_jfk,
    'time_spent_taxiing': time_spent_taxiing,
    'distance_median': distance_median,
    'score95': score95,
    'cancelled_flights': cancelled_flights,
    'least_squares': least_squares,
    'running_average': running_average,
}
