"""
Test Suite Configuration
"""
import itertools
from typing import Callable, List

import pytest

from sales_bi.analytics import SalesRecord
from sales_bi.config import AnalyticsSettings, ColumnSettings, Settings
from sales_bi.data import SalesDataGenerator
from sales_bi.transformation import normalize_records


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(APP_ENV="testing")


@pytest.fixture
def analytics_settings() -> AnalyticsSettings:
    """Default analysis settings, independent of the environment"""
    return AnalyticsSettings(
        all_years_sentinel="all",
        profit_margin=0.25,
        moving_average_window=3,
        top_products_limit=10,
        bottom_products_limit=5,
        performance_categories_limit=6,
    )


@pytest.fixture
def columns() -> ColumnSettings:
    """Source column labels"""
    return ColumnSettings()


@pytest.fixture
def make_record() -> Callable[..., SalesRecord]:
    """Factory for SalesRecord with sequential ids"""
    ids = itertools.count(1)

    def _make(
        total: int,
        date: str = "2023-01-15",
        name: str = "Kursi Jati",
        category: str = "Kursi",
        quantity: int = 1,
        price: int = 0,
    ) -> SalesRecord:
        return SalesRecord(
            id=next(ids),
            product_code=f"P-{name}",
            product_name=name,
            category=category,
            quantity_sold=quantity,
            unit_price=price,
            total_amount=total,
            transaction_date=date,
        )

    return _make


@pytest.fixture
def sample_records(make_record) -> List[SalesRecord]:
    """Six transactions over two years and three categories"""
    return [
        make_record(1000, "2023-01-10", "Kursi Jati", "Kursi", quantity=2, price=500),
        make_record(2000, "2023-02-05", "Meja Kerja", "Meja", quantity=1, price=2000),
        make_record(1500, "2023-02-20", "Kursi Jati", "Kursi", quantity=3, price=500),
        make_record(3000, "2024-01-15", "Sofa L", "Sofa", quantity=1, price=3000),
        make_record(2000, "2024-03-01", "Meja Kerja", "Meja", quantity=2, price=1000),
        make_record(1000, "2024-03-15", "Kursi Jati", "Kursi", quantity=2, price=500),
    ]


@pytest.fixture
def raw_rows(columns) -> List[dict]:
    """Raw rows as produced by a CSV reader, including malformed cells"""
    return [
        {
            columns.product_code: "KRS-001",
            columns.product_name: "Kursi Makan Jati",
            columns.category: "Kursi",
            columns.quantity_sold: "4",
            columns.unit_price: 850000,
            columns.total_amount: "3400000",
            columns.transaction_date: "2023-05-02",
        },
        {
            columns.product_code: "MJA-001",
            columns.product_name: "Meja Makan 6 Kursi",
            columns.category: "Meja",
            columns.quantity_sold: 1,
            columns.unit_price: 4200000,
            columns.total_amount: 4200000,
            columns.transaction_date: "",
        },
        {
            columns.product_code: 1001,
            columns.product_name: "Sofa Bed Lipat",
            columns.category: "Sofa",
            columns.quantity_sold: "n/a",
            columns.unit_price: 3100000.0,
            columns.total_amount: None,
            columns.transaction_date: "2024-01-09",
        },
    ]


@pytest.fixture
def generated_records(columns) -> List[SalesRecord]:
    """Three years of synthetic records with some dropped and malformed rows"""
    rows = SalesDataGenerator(seed=7, columns=columns).generate(
        n=400,
        start_year=2022,
        years=3,
        missing_date_rate=0.05,
        malformed_rate=0.05,
    )
    return normalize_records(rows, columns)
