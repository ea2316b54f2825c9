import logging
import os

import pandas as pd
import plotly.graph_objects as go

logger = logging.getLogger(__name__)


def build_running_average_figure(running_df: pd.DataFrame) -> go.Figure:
    """
    Line chart of the departure delay moving average per date.

    Args:
        running_df: Result of queries.running_average (date, movingAverage).
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=running_df['date'],
        y=running_df['movingAverage'],
        name='Moving Average',
        mode='lines',
        line=dict(color='firebrick', width=2)
    ))
    fig.update_layout(
        title_text='<b>Departure Delay, 11-Day Moving Average</b>',
        xaxis_title='Date',
        yaxis_title='Average Departure Delay (Minutes)',
        template='plotly_white'
    )
    return fig


def build_taxi_figure(taxi_df: pd.DataFrame, top_n: int = 25) -> go.Figure:
    """
    Bar chart of the airports with the longest average taxi time.

    Args:
        taxi_df: Result of queries.time_spent_taxiing (airport, taxi).
        top_n: Number of airports to show.
    """
    longest = taxi_df.tail(top_n).iloc[::-1]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=longest['airport'],
        y=longest['taxi'],
        name='Average Taxi Time',
        marker_color='indianred'
    ))
    fig.update_layout(
        title_text=f'<b>Top {top_n} Airports by Average Taxi Time</b>',
        xaxis_title='Airport',
        yaxis_title='Average Taxi Time (Minutes)',
        template='plotly_white'
    )
    return fig


def build_cancellation_figure(cancelled_df: pd.DataFrame, top_n: int = 25) -> go.Figure:
    """
    Bar chart of the airports with the highest share of cancelled departures.

    Args:
        cancelled_df: Result of queries.cancelled_flights (airport, city, percentage).
        top_n: Number of airports to show.
    """
    highest = cancelled_df.head(top_n)
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=highest['airport'],
        y=highest['percentage'],
        name='Cancelled Share',
        marker_color='lightsalmon',
        hovertext=highest['city']
    ))
    fig.update_layout(
        title_text=f'<b>Top {top_n} Airports by Cancellation Rate</b>',
        xaxis_title='Airport',
        yaxis_title='Share of Departures Cancelled',
        yaxis=dict(tickformat='.0%'),
        template='plotly_white'
    )
    return fig


def _write(fig: go.Figure, output_path: str):
    directory = os.path.dirname(output_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)
    fig.write_html(output_path)
    logger.info("Saved plot to %s", output_path)


def plot_running_average(running_df: pd.DataFrame, output_path: str):
    """Saves the moving average chart as HTML."""
    logger.info("Generating running average plot...")
    _write(build_running_average_figure(running_df), output_path)


def plot_taxi_times(taxi_df: pd.DataFrame, output_path: str, top_n: int = 25):
    """Saves the taxi time chart as HTML."""
    logger.info("Generating taxi time plot...")
    _write(build_taxi_figure(taxi_df, top_n), output_path)


def plot_cancellations(cancelled_df: pd.DataFrame, output_path: str, top_n: int = 25):
    """Saves the cancellation rate chart as HTML."""
    logger.info("Generating cancellation rate plot...")
    _write(build_cancellation_figure(cancelled_df, top_n), output_path)
