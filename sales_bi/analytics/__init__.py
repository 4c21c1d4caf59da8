"""
Sales Analytics Module
"""
from .engine import available_years, compute_analysis, filter_records
from .models import (
    AnalyticsSnapshot,
    CategoryAggregate,
    KPIComparison,
    MonthlyAggregate,
    ProductAggregate,
    ProductPerformanceEntry,
    SalesRecord,
    SummaryStatistics,
    TrendHighlights,
    YearlyAggregate,
)
from .ratios import NonFinite, Ratio, is_finite, percent_change, percentage, safe_divide

__all__ = [
    "available_years",
    "compute_analysis",
    "filter_records",
    "AnalyticsSnapshot",
    "CategoryAggregate",
    "KPIComparison",
    "MonthlyAggregate",
    "ProductAggregate",
    "ProductPerformanceEntry",
    "SalesRecord",
    "SummaryStatistics",
    "TrendHighlights",
    "YearlyAggregate",
    "NonFinite",
    "Ratio",
    "is_finite",
    "percent_change",
    "percentage",
    "safe_divide",
]
