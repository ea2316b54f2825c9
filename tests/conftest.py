import pandas as pd
import pytest

from airtraffic.schema import AIRPORT_COLUMNS, FLIGHT_COLUMNS, FLIGHT_DTYPES, RecordStore


def _flights(rows):
    return pd.DataFrame(rows, columns=FLIGHT_COLUMNS).astype(FLIGHT_DTYPES)


@pytest.fixture
def make_flights():
    """Builds a typed flights frame from dicts; absent fields become null."""
    return _flights


@pytest.fixture
def carriers():
    return pd.DataFrame({
        'Code': ['AA', 'B6', 'DL', 'XX', 'YY'],
        'Description': [
            'American Airlines Inc.', 'JetBlue Airways', 'Delta Air Lines Inc.',
            'Unflown Air', 'Ghost Lines',
        ],
    })


@pytest.fixture
def airports():
    return pd.DataFrame([
        ['ATL', 'William B Hartsfield-Atlanta Intl', 'Atlanta', 'GA', 'USA', 33.64, -84.43],
        ['JFK', 'John F Kennedy Intl', 'New York', 'NY', 'USA', 40.64, -73.78],
        ['LAS', 'McCarran International', 'Las Vegas', 'NV', 'USA', 36.08, -115.15],
        ['ORD', "Chicago O'Hare International", 'Chicago', 'IL', 'USA', 41.98, -87.90],
    ], columns=AIRPORT_COLUMNS)


@pytest.fixture
def flights():
    def row(month, day, carrier, flight_num, tail, origin, dest, distance, **extra):
        values = {
            'Year': 2008, 'Month': month, 'DayofMonth': day, 'DayOfWeek': 1,
            'UniqueCarrier': carrier, 'FlightNum': flight_num, 'TailNum': tail,
            'Origin': origin, 'Dest': dest, 'Distance': distance,
            'Cancelled': 0, 'CancellationCode': '', 'Diverted': 0,
        }
        values.update(extra)
        return values

    return _flights([
        row(1, 5, 'AA', 101, 'N1', 'LAS', 'JFK', 2248, DepDelay=10, WeatherDelay=5,
            TaxiIn=4, TaxiOut=10, CarrierDelay=3),
        row(1, 6, 'AA', 102, 'N1', 'JFK', 'LAS', 2248, DepDelay=0, WeatherDelay=0,
            TaxiIn=6, TaxiOut=20),
        row(2, 10, 'B6', 103, 'N2', 'LAS', 'JFK', 2248, DepDelay=20, WeatherDelay=40,
            TaxiIn=5, TaxiOut=15, CarrierDelay=10),
        row(3, 31, 'B6', 104, 'N2', 'LAS', 'JFK', 2248, DepDelay=30, WeatherDelay=120,
            TaxiIn=7, TaxiOut=9, CarrierDelay=0),
        row(4, 1, 'DL', 105, 'N3', 'ATL', 'ORD', 606, DepDelay=-5, WeatherDelay=500,
            TaxiIn=8, TaxiOut=12, CarrierDelay=20),
        row(4, 2, 'DL', 106, '', 'ATL', 'LAS', 1747, Cancelled=1, CancellationCode='D'),
        row(4, 3, 'DL', 107, 'N3', 'ORD', 'ATL', 606, Cancelled=1, CancellationCode='B'),
        row(4, 4, 'B6', 108, None, 'LAS', 'JFK', 2248, DepDelay=5,
            TaxiIn=3, TaxiOut=11, CarrierDelay=7),
    ])


@pytest.fixture
def store(flights, carriers, airports):
    return RecordStore(flights=flights, carriers=carriers, airports=airports)


@pytest.fixture
def running_table():
    """Fifteen departures between 2008-03-27 and 2008-04-05."""
    rows = [
        (3, 27, 12), (3, 27, -2), (3, 28, 3), (3, 29, -5), (3, 29, 12),
        (3, 30, 5), (3, 31, 47), (4, 1, 45), (4, 1, 2), (4, 2, -6),
        (4, 3, 0), (4, 3, 4), (4, 3, -2), (4, 4, 2), (4, 5, 27),
    ]
    return _flights([
        {'Year': 2008, 'Month': month, 'DayofMonth': day, 'DepDelay': delay}
        for month, day, delay in rows
    ])
