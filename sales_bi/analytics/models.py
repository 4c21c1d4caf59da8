"""
Analytics Data Models

Typed records and derived aggregates produced by the analysis engine.
Every aggregate is an immutable dataclass that refers to other aggregates
only by name, never by object reference.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .ratios import Ratio


@dataclass(frozen=True)
class SalesRecord:
    """Single normalized transaction line"""
    id: int  # 1-based position in the raw row sequence
    product_code: Optional[str]
    product_name: Optional[str]
    category: Optional[str]
    quantity_sold: int
    unit_price: int
    total_amount: int  # authoritative revenue figure
    transaction_date: str  # YYYY-MM-DD

    @property
    def year(self) -> str:
        return self.transaction_date.split("-")[0]

    @property
    def month(self) -> str:
        return self.transaction_date[:7]


@dataclass(frozen=True)
class SummaryStatistics:
    """Headline totals and averages for the filtered records"""
    total_transactions: int
    total_revenue: int
    avg_transaction: float
    max_transaction: int
    min_transaction: int
    avg_quantity: float
    avg_price: float
    median_price: float
    total_units: int
    total_products: int
    total_categories: int


@dataclass(frozen=True)
class CategoryAggregate:
    """Revenue rollup for one product category"""
    name: Optional[str]
    revenue: int
    transactions: int
    quantity: int
    avg_price: Ratio  # revenue / quantity
    avg_per_transaction: float
    revenue_share: Ratio  # percent of total revenue


@dataclass(frozen=True)
class YearlyAggregate:
    """Totals for one calendar year"""
    year: str
    revenue: int
    transactions: int
    units: int


@dataclass(frozen=True)
class MonthlyAggregate:
    """Totals for one YYYY-MM month with smoothing"""
    month: str
    revenue: int
    transactions: int
    units: int
    profit: float
    moving_average: Optional[float] = None


@dataclass(frozen=True)
class ProductAggregate:
    """Revenue rollup for one product name"""
    name: Optional[str]
    category: Optional[str]  # first category seen for the product
    revenue: int
    quantity: int
    transactions: int
    avg_price: Ratio
    avg_per_transaction: float


@dataclass(frozen=True)
class KPIComparison:
    """Year-over-year deltas between the two most recent years"""
    current_year: str
    previous_year: str
    revenue_growth: Ratio
    units_growth: Ratio
    transaction_growth: Ratio


@dataclass(frozen=True)
class ProductPerformanceEntry:
    """Category profile normalized against overall totals"""
    category: Optional[str]
    revenue_share: Ratio
    volume_share: Ratio
    avg_price_index: Ratio


@dataclass(frozen=True)
class TrendHighlights:
    """Monthly trend callouts"""
    best_month: str
    best_month_revenue: int
    month_over_month_growth: Optional[Ratio]  # None with fewer than two months
    average_monthly_revenue: float
    average_monthly_units: float


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """
    Complete analysis result for one record set and year filter.

    `records` holds the filtered records the aggregates were computed from,
    for raw-data listing and export.
    """
    records: Tuple[SalesRecord, ...]
    statistics: SummaryStatistics
    kpi_comparison: Optional[KPIComparison]
    categories: Tuple[CategoryAggregate, ...]
    yearly_trend: Tuple[YearlyAggregate, ...]
    monthly_trend: Tuple[MonthlyAggregate, ...]
    top_products: Tuple[ProductAggregate, ...]
    bottom_products: Tuple[ProductAggregate, ...]
    product_performance: Tuple[ProductPerformanceEntry, ...]
    highlights: TrendHighlights
    most_sold_product: Optional[ProductAggregate]
