"""
Configuration and Settings

This module contains the configuration settings for the air traffic
statistics project: data paths, loader settings, the default parameters
of each question, and logging.
"""

import logging
import os
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# Data paths
DATA_DIR = Path(os.getenv('AIRTRAFFIC_DATA_DIR', PROJECT_ROOT / 'data'))
FLIGHTS_CSV = DATA_DIR / '2008.csv'
CARRIERS_CSV = DATA_DIR / 'carriers.csv'
AIRPORTS_CSV = DATA_DIR / 'airports.csv'

# Loader settings
NULL_VALUE = os.getenv('AIRTRAFFIC_NULL_VALUE', 'NA')
DATE_COLUMNS = ('Year', 'Month', 'DayofMonth')

# Question defaults
SECURITY_CANCELLATION_CODE = 'D'
WEATHER_WINDOW = ('2008-01-01', '2008-03-31')
ROUTE_ORIGIN = 'LAS'
ROUTE_DEST = 'JFK'
SCORE_PERCENTILE = 0.95
PERCENTILE_ACCURACY = int(os.getenv('AIRTRAFFIC_PERCENTILE_ACCURACY', 10000))
DEFAULT_RADIUS_DAYS = int(os.getenv('AIRTRAFFIC_RADIUS_DAYS', 5))

# Logging configuration
LOGGING_CONFIG = {
    'level': os.getenv('LOG_LEVEL', 'INFO'),
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'datefmt': '%Y-%m-%d %H:%M:%S'
}


def configure_logging(level=None):
    """
    Configure the root logger from LOGGING_CONFIG.

    Args:
        level: Optional level name overriding LOGGING_CONFIG['level']
    """
    logging.basicConfig(
        level=(level or LOGGING_CONFIG['level']).upper(),
        format=LOGGING_CONFIG['format'],
        datefmt=LOGGING_CONFIG['datefmt'],
        force=True,
    )
