# airtraffic/schema.py

from dataclasses import asdict, dataclass, fields
from typing import Iterable, Optional

import pandas as pd


# Column layout of the flights table, in file order.
FLIGHT_DTYPES = {
    'Year': 'Int64',
    'Month': 'Int64',
    'DayofMonth': 'Int64',
    'DayOfWeek': 'Int64',
    'DepTime': 'Int64',
    'CRSDepTime': 'Int64',
    'ArrTime': 'Int64',
    'CRSArrTime': 'Int64',
    'UniqueCarrier': 'object',
    'FlightNum': 'Int64',
    'TailNum': 'object',
    'ActualElapsedTime': 'Int64',
    'CRSElapsedTime': 'Int64',
    'AirTime': 'Int64',
    'ArrDelay': 'Int64',
    'DepDelay': 'Int64',
    'Origin': 'object',
    'Dest': 'object',
    'Distance': 'Int64',
    'TaxiIn': 'Int64',
    'TaxiOut': 'Int64',
    'Cancelled': 'Int64',
    'CancellationCode': 'object',
    'Diverted': 'Int64',
    'CarrierDelay': 'Int64',
    'WeatherDelay': 'Int64',
    'NASDelay': 'Int64',
    'SecurityDelay': 'Int64',
    'LateAircraftDelay': 'Int64',
}

FLIGHT_COLUMNS = list(FLIGHT_DTYPES)
NUMERIC_FLIGHT_COLUMNS = [col for col, dtype in FLIGHT_DTYPES.items() if dtype == 'Int64']
STRING_FLIGHT_COLUMNS = [col for col, dtype in FLIGHT_DTYPES.items() if dtype == 'object']

CARRIER_COLUMNS = ['Code', 'Description']
AIRPORT_COLUMNS = ['iata', 'airport', 'city', 'state', 'country', 'lat', 'long']


@dataclass
class FlightRecord:
    year: int
    month: int
    day_of_month: int
    day_of_week: int
    dep_time: Optional[int]
    crs_dep_time: Optional[int]
    arr_time: Optional[int]
    crs_arr_time: Optional[int]
    unique_carrier: str
    flight_num: int
    tail_num: Optional[str]
    actual_elapsed_time: Optional[int]
    crs_elapsed_time: Optional[int]
    air_time: Optional[int]
    arr_delay: Optional[int]
    dep_delay: Optional[int]
    origin: str
    dest: str
    distance: int
    taxi_in: Optional[int]
    taxi_out: Optional[int]
    cancelled: int
    cancellation_code: Optional[str]
    diverted: int
    carrier_delay: Optional[int]
    weather_delay: Optional[int]
    nas_delay: Optional[int]
    security_delay: Optional[int]
    late_aircraft_delay: Optional[int]


@dataclass
class Carrier:
    code: str
    description: str


@dataclass
class Airport:
    iata: str
    airport: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    long: Optional[float] = None


def flights_frame(records: Iterable[FlightRecord]) -> pd.DataFrame:
    """
    Builds a typed flights DataFrame from FlightRecord objects.
    Attribute order on FlightRecord matches FLIGHT_COLUMNS.
    """
    rename_map = {f.name: col for f, col in zip(fields(FlightRecord), FLIGHT_COLUMNS)}
    df = pd.DataFrame([asdict(r) for r in records], columns=list(rename_map))
    df = df.rename(columns=rename_map)
    return df.astype(FLIGHT_DTYPES)


@dataclass(frozen=True, eq=False)
class RecordStore:
    """
    Immutable container for the flights table and the two reference tables.

    Query functions only read from the frames and always return new ones,
    so a single store can be shared by any number of concurrent queries.
    """
    flights: pd.DataFrame
    carriers: pd.DataFrame
    airports: pd.DataFrame

    @classmethod
    def from_records(cls, flights: Iterable[FlightRecord],
                     carriers: Iterable[Carrier] = (),
                     airports: Iterable[Airport] = ()) -> 'RecordStore':
        carriers_df = pd.DataFrame([asdict(c) for c in carriers], columns=['code', 'description'])
        carriers_df.columns = CARRIER_COLUMNS
        airports_df = pd.DataFrame([asdict(a) for a in airports], columns=AIRPORT_COLUMNS)
        return cls(flights=flights_frame(flights), carriers=carriers_df, airports=airports_df)
