# airtraffic/cli.py
"""
Command line entry point: loads the three CSV files and prints the answer
to each selected question.
"""

import argparse
import logging
import os
import sys

import pandas as pd

from airtraffic.config import AIRPORTS_CSV, CARRIERS_CSV, FLIGHTS_CSV, configure_logging
from airtraffic.errors import AirTrafficError
from airtraffic.load import load_store
from airtraffic.queries import QUESTIONS, cancelled_flights, running_average, time_spent_taxiing
from airtraffic.visualize import plot_cancellations, plot_running_average, plot_taxi_times

logger = logging.getLogger(__name__)


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Answer statistical questions over a year of flight records',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Answer every question
  airtraffic --flights data/2008.csv

  # Only the taxi times and the running average, with plots
  airtraffic -q time_spent_taxiing -q running_average --plots outputs/plots
        """
    )
    parser.add_argument('--flights', default=str(FLIGHTS_CSV), help='Flight records CSV')
    parser.add_argument('--carriers', default=str(CARRIERS_CSV), help='Carriers CSV')
    parser.add_argument('--airports', default=str(AIRPORTS_CSV), help='Airports CSV')
    parser.add_argument(
        '-q', '--question',
        action='append',
        choices=list(QUESTIONS),
        help='Question to answer (repeatable, default: all)'
    )
    parser.add_argument('--plots', help='Directory to write HTML plots into')
    parser.add_argument('--log-level', default=None, help='Logging level (default: LOG_LEVEL or INFO)')
    return parser.parse_args(argv)


def format_result(result) -> str:
    if isinstance(result, pd.DataFrame):
        return result.to_string(index=False)
    return str(result)


def write_plots(store, plots_dir: str):
    plot_running_average(running_average(store), os.path.join(plots_dir, 'running_average.html'))
    plot_taxi_times(time_spent_taxiing(store), os.path.join(plots_dir, 'taxi_times.html'))
    plot_cancellations(cancelled_flights(store), os.path.join(plots_dir, 'cancellations.html'))


def main(argv=None) -> int:
    """
    Main entry point.

    Returns:
        Process exit status
    """
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    try:
        store = load_store(args.flights, args.carriers, args.airports)
    except (FileNotFoundError, AirTrafficError) as e:
        logger.error("Could not load data: %s", e)
        return 1

    status = 0
    for name in args.question or list(QUESTIONS):
        print(f"<<< {name} >>>")
        try:
            print(format_result(QUESTIONS[name](store)))
        except AirTrafficError as e:
            logger.error("%s failed: %s", name, e)
            status = 1
        print()

    if args.plots:
        try:
            write_plots(store, args.plots)
        except AirTrafficError as e:
            logger.error("Plotting failed: %s", e)
            status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())
