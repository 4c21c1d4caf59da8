"""
Unit Tests - Analysis Engine
"""
import pytest

from sales_bi.analytics import (
    NonFinite,
    available_years,
    compute_analysis,
    filter_records,
)
from sales_bi.config import AnalyticsSettings
from sales_bi.transformation import normalize_records


class TestFilterRecords:
    """Tests for filter_records and available_years"""

    def test_all_sentinel(self, sample_records):
        assert filter_records(sample_records, "all") == tuple(sample_records)

    def test_year_prefix(self, sample_records):
        filtered = filter_records(sample_records, "2024")
        assert [r.id for r in filtered] == [4, 5, 6]

    def test_custom_sentinel(self, sample_records):
        assert len(filter_records(sample_records, "*", all_years_sentinel="*")) == 6
        assert filter_records(sample_records, "all", all_years_sentinel="*") == ()

    def test_available_years(self, sample_records):
        assert available_years(list(reversed(sample_records))) == ["2023", "2024"]
        assert available_years([]) == []


class TestComputeAnalysis:
    """Tests for compute_analysis"""

    def test_empty_input(self, analytics_settings):
        """Test no data yields no snapshot"""
        assert compute_analysis([], "all", analytics_settings) is None

    def test_filter_without_matches(self, sample_records, analytics_settings):
        assert compute_analysis(sample_records, "2019", analytics_settings) is None

    def test_snapshot_contents(self, sample_records, analytics_settings):
        snapshot = compute_analysis(sample_records, "all", analytics_settings)

        assert snapshot.records == tuple(sample_records)
        assert snapshot.statistics.total_revenue == 10500
        assert [c.name for c in snapshot.categories] == ["Meja", "Kursi", "Sofa"]
        assert [y.year for y in snapshot.yearly_trend] == ["2023", "2024"]
        assert len(snapshot.monthly_trend) == 4
        assert snapshot.top_products[0].name == "Meja Kerja"
        assert snapshot.bottom_products[0].name == "Sofa L"
        assert len(snapshot.product_performance) == 3
        assert snapshot.highlights.best_month == "2023-02"
        assert snapshot.most_sold_product.name == "Kursi Jati"

    def test_kpi_comparison(self, sample_records, analytics_settings):
        kpi = compute_analysis(sample_records, "all", analytics_settings).kpi_comparison

        assert kpi.previous_year == "2023"
        assert kpi.current_year == "2024"
        assert kpi.revenue_growth == pytest.approx((6000 - 4500) / 4500 * 100)
        assert kpi.units_growth == pytest.approx((5 - 6) / 6 * 100)
        assert kpi.transaction_growth == 0.0

    def test_kpi_absent_for_single_year(self, sample_records, analytics_settings):
        """Test a year filter leaves a single year and no comparison"""
        snapshot = compute_analysis(sample_records, "2023", analytics_settings)

        assert snapshot.statistics.total_transactions == 3
        assert snapshot.kpi_comparison is None

    def test_kpi_growth_values(self, make_record, analytics_settings):
        records = [
            make_record(1000, date="2023-06-01", quantity=2),
            make_record(1500, date="2024-06-01", quantity=3),
        ]
        kpi = compute_analysis(records, "all", analytics_settings).kpi_comparison

        assert kpi.revenue_growth == 50.0
        assert kpi.units_growth == 50.0

    def test_kpi_zero_base(self, make_record, analytics_settings):
        """Test zero previous-year revenue surfaces a marker"""
        records = [
            make_record(0, date="2023-06-01", quantity=0),
            make_record(1500, date="2024-06-01", quantity=3),
        ]
        kpi = compute_analysis(records, "all", analytics_settings).kpi_comparison

        assert kpi.revenue_growth is NonFinite.INFINITE

    def test_idempotent(self, generated_records, analytics_settings):
        """Test repeated calls give identical snapshots"""
        first = compute_analysis(generated_records, "all", analytics_settings)
        second = compute_analysis(generated_records, "all", analytics_settings)

        assert first == second

    def test_conservation(self, generated_records, analytics_settings):
        """Test category rollups add up to the totals"""
        snapshot = compute_analysis(generated_records, "all", analytics_settings)
        stats = snapshot.statistics

        assert sum(c.revenue for c in snapshot.categories) == stats.total_revenue
        assert sum(c.transactions for c in snapshot.categories) == stats.total_transactions
        assert sum(c.quantity for c in snapshot.categories) == stats.total_units
        assert sum(y.revenue for y in snapshot.yearly_trend) == stats.total_revenue
        assert sum(m.transactions for m in snapshot.monthly_trend) == stats.total_transactions

    def test_filter_consistency(self, generated_records, analytics_settings):
        """Test filtering by year equals analyzing the pre-filtered records"""
        prefiltered = [r for r in generated_records if r.transaction_date.startswith("2023")]

        filtered = compute_analysis(generated_records, "2023", analytics_settings)
        direct = compute_analysis(prefiltered, "all", analytics_settings)

        assert filtered is not None
        assert filtered == direct

    def test_generated_years(self, generated_records, analytics_settings):
        snapshot = compute_analysis(generated_records, "all", analytics_settings)

        assert [y.year for y in snapshot.yearly_trend] == ["2022", "2023", "2024"]
        assert snapshot.kpi_comparison.current_year == "2024"
        assert len(snapshot.top_products) == 10
        assert len(snapshot.bottom_products) == 5
        assert len(snapshot.product_performance) == 6
        assert snapshot.monthly_trend[0].moving_average is None
        assert snapshot.monthly_trend[2].moving_average is not None

    def test_settings_override(self, sample_records):
        settings = AnalyticsSettings(
            profit_margin=0.5,
            moving_average_window=2,
            top_products_limit=2,
            bottom_products_limit=1,
            performance_categories_limit=2,
        )
        snapshot = compute_analysis(sample_records, "all", settings)

        assert len(snapshot.top_products) == 2
        assert [p.name for p in snapshot.bottom_products] == ["Sofa L"]
        assert len(snapshot.product_performance) == 2
        assert snapshot.monthly_trend[0].profit == 500.0
        assert snapshot.monthly_trend[1].moving_average == 2250.0

    def test_default_settings(self, sample_records):
        """Test settings fall back to the configured defaults"""
        snapshot = compute_analysis(sample_records)
        assert snapshot.statistics.total_transactions == 6

    def test_oversized_cells_do_not_break_analysis(self, columns, analytics_settings):
        """Test rows with out-of-range numbers analyze as zero revenue"""
        rows = [{
            columns.product_code: "KRS-001",
            columns.product_name: "Kursi Jati",
            columns.category: "Kursi",
            columns.quantity_sold: "2",
            columns.unit_price: "99999999999999999999",
            columns.total_amount: "99999999999999999999",
            columns.transaction_date: "2023-05-02",
        }]

        snapshot = compute_analysis(normalize_records(rows, columns), "all", analytics_settings)

        assert snapshot.statistics.total_revenue == 0
        assert snapshot.statistics.total_units == 2
