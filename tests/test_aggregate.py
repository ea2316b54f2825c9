from datetime import date

import pandas as pd
import pytest

from airtraffic.aggregate import (
    average_of_two_directed_sums, count_by, filter_equals, filter_range, ratio_by_group,
    synthesize_dates
)
from airtraffic.errors import DivisionByZeroError, InvalidInputError


def test_count_by_sorts_by_count_then_key(flights):
    result = count_by(flights, 'TailNum')

    assert list(result.columns) == ['TailNum', 'count']
    assert result['TailNum'].tolist() == ['N1', 'N2', 'N3', '']
    assert result['count'].tolist() == [2, 2, 2, 1]


def test_count_by_total_matches_non_null_keys(flights):
    result = count_by(flights, 'TailNum')
    assert result['count'].sum() == flights['TailNum'].notna().sum()


def test_count_by_breaks_ties_by_ascending_key():
    table = pd.DataFrame({'key': ['c', 'a', 'b', 'c', 'a', 'd']})
    result = count_by(table, 'key')
    assert result['key'].tolist() == ['a', 'c', 'b', 'd']


def test_count_by_missing_column(flights):
    with pytest.raises(InvalidInputError):
        count_by(flights, 'NoSuchColumn')


def test_count_by_is_idempotent(flights):
    pd.testing.assert_frame_equal(count_by(flights, 'Origin'), count_by(flights, 'Origin'))


def test_filter_equals_ignores_nulls(flights):
    assert filter_equals(flights, 'TailNum', 'N3')['FlightNum'].tolist() == [105, 107]
    # CarrierDelay is null for three rows; none of them match 0
    assert filter_equals(flights, 'CarrierDelay', 0)['FlightNum'].tolist() == [104]


def test_filter_equals_is_case_sensitive(flights):
    assert filter_equals(flights, 'Origin', 'las').empty


def test_filter_range_is_inclusive(flights):
    result = filter_range(flights, '2008-01-06', '2008-03-31')
    assert result['FlightNum'].tolist() == [102, 103, 104]


def test_filter_range_accepts_dates(flights):
    result = filter_range(flights, date(2008, 3, 31), date(2008, 4, 1))
    assert result['FlightNum'].tolist() == [104, 105]


def test_synthesize_dates_handles_missing_and_impossible_dates(make_flights):
    table = make_flights([
        {'Year': 2008, 'Month': 2, 'DayofMonth': 29},
        {'Year': 2007, 'Month': 2, 'DayofMonth': 29},
        {'Year': 2008, 'Month': None, 'DayofMonth': 1},
    ])
    dates = synthesize_dates(table)

    assert dates.iloc[0] == pd.Timestamp('2008-02-29')
    assert pd.isna(dates.iloc[1])
    assert pd.isna(dates.iloc[2])


def test_ratio_by_group(flights):
    result = ratio_by_group(flights, 'Origin', 'Cancelled', 'Cancelled', name='percentage')
    rates = dict(zip(result['Origin'], result['percentage']))

    assert rates == {'ATL': 0.5, 'JFK': 0.0, 'LAS': 0.0, 'ORD': 1.0}


def test_ratio_by_group_zero_denominator(make_flights):
    table = make_flights([
        {'Origin': 'LAS', 'Cancelled': 0, 'TaxiIn': 5},
        {'Origin': 'JFK', 'Cancelled': 1, 'TaxiIn': None},
    ])
    with pytest.raises(DivisionByZeroError) as excinfo:
        ratio_by_group(table, 'Origin', 'Cancelled', 'TaxiIn')

    assert 'JFK' in str(excinfo.value)
    assert isinstance(excinfo.value, ZeroDivisionError)


def test_average_of_two_directed_sums(flights):
    result = average_of_two_directed_sums(
        flights, 'Origin', 'TaxiIn', 'Dest', 'TaxiOut', skip_empty=True
    )

    assert list(result.columns) == ['airport', 'taxi']
    assert result['airport'].tolist() == ['LAS', 'ATL', 'JFK', 'ORD']
    assert result['taxi'].tolist() == pytest.approx([7.8, 8.0, 10.2, 12.0])


def test_average_of_two_directed_sums_counts_each_side_separately(make_flights):
    # TaxiIn is missing on a row whose TaxiOut is present; the Dest side
    # divides by its own count of TaxiOut values
    table = make_flights([
        {'Origin': 'AAA', 'Dest': 'BBB', 'TaxiIn': 2, 'TaxiOut': 10},
        {'Origin': 'AAA', 'Dest': 'BBB', 'TaxiIn': None, 'TaxiOut': 20},
    ])
    result = average_of_two_directed_sums(table, 'Origin', 'TaxiIn', 'Dest', 'TaxiOut')

    assert result['airport'].tolist() == ['AAA', 'BBB']
    assert result['taxi'].tolist() == [2.0, 15.0]


def test_average_of_two_directed_sums_without_data(flights):
    # ORD appears as an origin and a destination only on rows without taxi data
    with pytest.raises(DivisionByZeroError):
        average_of_two_directed_sums(
            flights.loc[flights['FlightNum'] != 105], 'Origin', 'TaxiIn', 'Dest', 'TaxiOut'
        )
