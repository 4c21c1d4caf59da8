"""
Sales BI Analytics

Analytics engine for flat sales transaction records: normalization of raw
rows, summary statistics, category/product/time-series rollups, year-over-year
KPIs and a normalized category performance view.
"""

__version__ = "1.0.0"
