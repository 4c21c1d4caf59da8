"""
Analysis Engine

Stateless entry point that turns a normalized record set and a year filter
into an AnalyticsSnapshot. Every call recomputes from the records it is
given; nothing is cached between calls.
"""

from typing import List, Optional, Sequence, Tuple

import structlog

from sales_bi.config import AnalyticsSettings, get_settings
from .aggregations import (
    aggregate_categories,
    aggregate_months,
    aggregate_products,
    aggregate_years,
    compare_years,
    most_sold,
    performance_profile,
    rank_products,
    records_to_frame,
    summarize,
    trend_highlights,
)
from .models import AnalyticsSnapshot, SalesRecord

logger = structlog.get_logger(__name__)


def available_years(records: Sequence[SalesRecord]) -> List[str]:
    """Distinct year prefixes of the records, ascending"""
    return sorted({record.year for record in records})


def filter_records(
    records: Sequence[SalesRecord],
    year_filter: str,
    all_years_sentinel: str = "all",
) -> Tuple[SalesRecord, ...]:
    """Keep records whose date starts with year_filter, or all for the sentinel"""
    if year_filter == all_years_sentinel:
        return tuple(records)
    return tuple(r for r in records if r.transaction_date.startswith(year_filter))


def compute_analysis(
    records: Sequence[SalesRecord],
    year_filter: str = "all",
    settings: Optional[AnalyticsSettings] = None,
) -> Optional[AnalyticsSnapshot]:
    """
    Compute every derived aggregate for the records matching year_filter.

    Args:
        records: Normalized records, in import order
        year_filter: The all-years sentinel or a 4-digit year
        settings: Analysis settings; defaults to configured settings

    Returns:
        AnalyticsSnapshot, or None when no record matches the filter
    """
    settings = settings or get_settings().analytics
    filtered = filter_records(records, year_filter, settings.all_years_sentinel)

    if not filtered:
        logger.info("No records to analyze", year_filter=year_filter, total_records=len(records))
        return None

    df = records_to_frame(filtered)

    statistics = summarize(df)
    yearly = aggregate_years(df)
    kpi_comparison = compare_years(yearly)
    categories = aggregate_categories(df, statistics.total_revenue)
    monthly = aggregate_months(
        df,
        profit_margin=settings.profit_margin,
        window=settings.moving_average_window,
    )
    products = aggregate_products(df)
    top_products, bottom_products = rank_products(
        products,
        top_limit=settings.top_products_limit,
        bottom_limit=settings.bottom_products_limit,
    )
    performance = performance_profile(
        categories,
        statistics,
        limit=settings.performance_categories_limit,
    )

    logger.debug(
        "Analysis computed",
        year_filter=year_filter,
        records=len(filtered),
        categories=len(categories),
        products=len(products),
        months=len(monthly),
    )

    return AnalyticsSnapshot(
        records=filtered,
        statistics=statistics,
        kpi_comparison=kpi_comparison,
        categories=tuple(categories),
        yearly_trend=tuple(yearly),
        monthly_trend=tuple(monthly),
        top_products=tuple(top_products),
        bottom_products=tuple(bottom_products),
        product_performance=tuple(performance),
        highlights=trend_highlights(monthly),
        most_sold_product=most_sold(top_products),
    )
