"""
Sales Aggregations

Group-by rollups over normalized sales records.
Each rollup is a two-pass fold:
- accumulate sums per key with a Polars group_by (first-seen key order)
- derive ratios from the accumulated sums, one pass over the groups

Includes:
- Summary statistics with median unit price
- Category, product, yearly and monthly rollups
- Year-over-year KPI comparison
- Category performance profile (radar view)
"""

from typing import List, Optional, Sequence, Tuple

import polars as pl

from .models import (
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
from .ratios import percent_change, percentage, safe_divide


RECORD_SCHEMA = {
    "id": pl.Int64,
    "product_code": pl.Utf8,
    "product_name": pl.Utf8,
    "category": pl.Utf8,
    "quantity_sold": pl.Int64,
    "unit_price": pl.Int64,
    "total_amount": pl.Int64,
    "transaction_date": pl.Utf8,
}


def records_to_frame(records: Sequence[SalesRecord]) -> pl.DataFrame:
    """
    Build a DataFrame from records, adding `year` and `month` key columns.

    `year` is the text before the first "-" of the date, `month` its
    first seven characters.
    """
    df = pl.DataFrame(
        {name: [getattr(record, name) for record in records] for name in RECORD_SCHEMA},
        schema=RECORD_SCHEMA,
    )
    return df.with_columns(
        pl.col("transaction_date").str.split("-").list.first().alias("year"),
        pl.col("transaction_date").str.slice(0, 7).alias("month"),
    )


def calculate_median(values: pl.Series) -> float:
    """Median of a numeric series: midpoint of the ascending sort"""
    ordered = values.sort()
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def summarize(df: pl.DataFrame) -> SummaryStatistics:
    """
    Headline statistics for a non-empty record frame.

    Averages are per transaction; `avg_price` is the mean unit price,
    not revenue per unit.
    """
    totals = df.select(
        pl.len().alias("transactions"),
        pl.col("total_amount").sum().alias("revenue"),
        pl.col("total_amount").max().alias("max_transaction"),
        pl.col("total_amount").min().alias("min_transaction"),
        pl.col("quantity_sold").sum().alias("units"),
        pl.col("unit_price").sum().alias("price_sum"),
        pl.col("product_name").n_unique().alias("products"),
        pl.col("category").n_unique().alias("categories"),
    ).row(0, named=True)

    count = totals["transactions"]

    return SummaryStatistics(
        total_transactions=count,
        total_revenue=totals["revenue"],
        avg_transaction=totals["revenue"] / count,
        max_transaction=totals["max_transaction"],
        min_transaction=totals["min_transaction"],
        avg_quantity=totals["units"] / count,
        avg_price=totals["price_sum"] / count,
        median_price=calculate_median(df.get_column("unit_price")),
        total_units=totals["units"],
        total_products=totals["products"],
        total_categories=totals["categories"],
    )


def _fold(df: pl.DataFrame, key: str, *extra: pl.Expr) -> pl.DataFrame:
    """Accumulate revenue, count and quantity per key, keeping first-seen order"""
    return df.group_by(key, maintain_order=True).agg(
        *extra,
        pl.col("total_amount").sum().alias("revenue"),
        pl.len().alias("transactions"),
        pl.col("quantity_sold").sum().alias("quantity"),
    )


def aggregate_categories(df: pl.DataFrame, total_revenue: int) -> List[CategoryAggregate]:
    """Category rollup, descending by revenue; ties keep first-seen order"""
    grouped = _fold(df, "category").sort("revenue", descending=True, maintain_order=True)

    return [
        CategoryAggregate(
            name=row["category"],
            revenue=row["revenue"],
            transactions=row["transactions"],
            quantity=row["quantity"],
            avg_price=safe_divide(row["revenue"], row["quantity"]),
            avg_per_transaction=row["revenue"] / row["transactions"],
            revenue_share=percentage(row["revenue"], total_revenue),
        )
        for row in grouped.iter_rows(named=True)
    ]


def aggregate_years(df: pl.DataFrame) -> List[YearlyAggregate]:
    """Yearly rollup, ascending by year string"""
    grouped = _fold(df, "year").sort("year")

    return [
        YearlyAggregate(
            year=row["year"],
            revenue=row["revenue"],
            transactions=row["transactions"],
            units=row["quantity"],
        )
        for row in grouped.iter_rows(named=True)
    ]


def aggregate_months(
    df: pl.DataFrame,
    profit_margin: float = 0.25,
    window: int = 3,
) -> List[MonthlyAggregate]:
    """
    Monthly rollup, ascending by YYYY-MM, with a trailing moving average.

    The moving average is computed after sorting; the first `window - 1`
    months have none.
    """
    grouped = (
        _fold(df, "month")
        .sort("month")
        .with_columns(
            (pl.col("revenue") * profit_margin).alias("profit"),
            pl.col("revenue").rolling_mean(window_size=window).alias("moving_average"),
        )
    )

    return [
        MonthlyAggregate(
            month=row["month"],
            revenue=row["revenue"],
            transactions=row["transactions"],
            units=row["quantity"],
            profit=row["profit"],
            moving_average=row["moving_average"],
        )
        for row in grouped.iter_rows(named=True)
    ]


def aggregate_products(df: pl.DataFrame) -> List[ProductAggregate]:
    """Product rollup, descending by revenue; ties keep first-seen order"""
    grouped = _fold(
        df,
        "product_name",
        pl.col("category").first().alias("category"),
    ).sort("revenue", descending=True, maintain_order=True)

    return [
        ProductAggregate(
            name=row["product_name"],
            category=row["category"],
            revenue=row["revenue"],
            quantity=row["quantity"],
            transactions=row["transactions"],
            avg_price=safe_divide(row["revenue"], row["quantity"]),
            avg_per_transaction=row["revenue"] / row["transactions"],
        )
        for row in grouped.iter_rows(named=True)
    ]


def rank_products(
    products: Sequence[ProductAggregate],
    top_limit: int = 10,
    bottom_limit: int = 5,
) -> Tuple[List[ProductAggregate], List[ProductAggregate]]:
    """
    Split revenue-ordered products into top and bottom lists.

    The bottom list is the tail of the same ordering, reversed so the
    worst performer comes first.
    """
    top = list(products[:top_limit])
    bottom = list(reversed(products[-bottom_limit:]))
    return top, bottom


def compare_years(yearly: Sequence[YearlyAggregate]) -> Optional[KPIComparison]:
    """Growth of the latest year over the one before; None with fewer than two years"""
    if len(yearly) < 2:
        return None

    previous, current = yearly[-2], yearly[-1]

    return KPIComparison(
        current_year=current.year,
        previous_year=previous.year,
        revenue_growth=percent_change(current.revenue, previous.revenue),
        units_growth=percent_change(current.units, previous.units),
        transaction_growth=percent_change(current.transactions, previous.transactions),
    )


def performance_profile(
    categories: Sequence[CategoryAggregate],
    statistics: SummaryStatistics,
    limit: int = 6,
) -> List[ProductPerformanceEntry]:
    """Top categories expressed as percentages of the overall totals"""
    return [
        ProductPerformanceEntry(
            category=category.name,
            revenue_share=percentage(category.revenue, statistics.total_revenue),
            volume_share=percentage(category.quantity, statistics.total_units),
            avg_price_index=percentage(category.avg_price, statistics.avg_price),
        )
        for category in categories[:limit]
    ]


def trend_highlights(monthly: Sequence[MonthlyAggregate]) -> TrendHighlights:
    """Best month, latest month-over-month growth and monthly averages"""
    best = max(monthly, key=lambda m: m.revenue)

    growth = None
    if len(monthly) > 1:
        growth = percent_change(monthly[-1].revenue, monthly[-2].revenue)

    return TrendHighlights(
        best_month=best.month,
        best_month_revenue=best.revenue,
        month_over_month_growth=growth,
        average_monthly_revenue=sum(m.revenue for m in monthly) / len(monthly),
        average_monthly_units=sum(m.units for m in monthly) / len(monthly),
    )


def most_sold(products: Sequence[ProductAggregate]) -> Optional[ProductAggregate]:
    """Product with the highest quantity; first in the given order on ties"""
    if not products:
        return None
    return max(products, key=lambda p: p.quantity)
