from airtraffic import queries
from airtraffic.schema import Airport, Carrier, FLIGHT_COLUMNS, FLIGHT_DTYPES, FlightRecord, RecordStore


def record(tail_num, origin, dest, cancelled=0, dep_delay=None):
    return FlightRecord(
        year=2008, month=1, day_of_month=3, day_of_week=4,
        dep_time=None, crs_dep_time=None, arr_time=None, crs_arr_time=None,
        unique_carrier='WN', flight_num=335, tail_num=tail_num,
        actual_elapsed_time=None, crs_elapsed_time=None, air_time=None,
        arr_delay=None, dep_delay=dep_delay, origin=origin, dest=dest, distance=810,
        taxi_in=None, taxi_out=None, cancelled=cancelled, cancellation_code='',
        diverted=0, carrier_delay=None, weather_delay=None, nas_delay=None,
        security_delay=None, late_aircraft_delay=None,
    )


def test_from_records_builds_typed_tables():
    store = RecordStore.from_records(
        [record('N712SW', 'IAD', 'TPA', dep_delay=8), record('N712SW', 'TPA', 'IAD', cancelled=1)],
        carriers=[Carrier('WN', 'Southwest Airlines Co.')],
        airports=[Airport('IAD', 'Washington Dulles International', 'Chantilly')],
    )

    assert list(store.flights.columns) == FLIGHT_COLUMNS
    assert {col: str(dtype) for col, dtype in store.flights.dtypes.items()} == FLIGHT_DTYPES
    assert store.flights['DepDelay'].isna().tolist() == [False, True]
    assert store.carriers.columns.tolist() == ['Code', 'Description']
    assert store.airports.loc[0, 'city'] == 'Chantilly'


def test_store_from_records_answers_questions():
    store = RecordStore.from_records(
        [record('N712SW', 'IAD', 'TPA'), record('N712SW', 'TPA', 'IAD'), record('N428WN', 'IAD', 'TPA')],
        carriers=[Carrier('WN', 'Southwest Airlines Co.'), Carrier('9E', 'Pinnacle Airlines Inc.')],
    )

    assert queries.flight_count(store).values.tolist() == [['N712SW', 2], ['N428WN', 1]]
    assert queries.did_not_fly(store)['Description'].tolist() == ['Pinnacle Airlines Inc.']
