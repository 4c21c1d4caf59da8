"""
Data Transformation Module
"""
from .normalizers import (
    NormalizationStats,
    RecordNormalizer,
    normalize_records,
    parse_date,
    parse_int,
)

__all__ = [
    "NormalizationStats",
    "RecordNormalizer",
    "normalize_records",
    "parse_date",
    "parse_int",
]
