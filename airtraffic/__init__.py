"""
Air Traffic Statistics Package

This package answers statistical questions over a year of flight records
enriched with carrier and airport reference data:
- schema: record layouts and the immutable RecordStore
- load: CSV loader producing a RecordStore
- aggregate: group-by counts, sums and ratios
- join: equality joins and anti-joins
- stats: exact-rank median and approximate percentile
- regression: least squares over grouped means
- window: calendar-windowed moving average
- queries: one function per question
- visualize: plotly charts of the results
- cli: command line entry point
"""

__version__ = "1.0.0"
