"""
Synthetic Sales Data Generator

Generates raw furniture sales rows, keyed by the source column labels,
for testing and development. Optionally injects malformed rows:
- rows without a transaction date
- non-numeric quantity / price cells
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from sales_bi.config import ColumnSettings, get_settings

logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

# (code, name, category, base unit price in Rupiah)
CATALOGUE: List[Tuple[str, str, str, int]] = [
    ("KRS-001", "Kursi Makan Jati", "Kursi", 850_000),
    ("KRS-002", "Kursi Kantor Ergonomis", "Kursi", 1_450_000),
    ("KRS-003", "Kursi Teras Rotan", "Kursi", 650_000),
    ("MJA-001", "Meja Makan 6 Kursi", "Meja", 4_200_000),
    ("MJA-002", "Meja Kerja Minimalis", "Meja", 1_750_000),
    ("MJA-003", "Meja Tamu Kaca", "Meja", 1_200_000),
    ("LMR-001", "Lemari Pakaian 3 Pintu", "Lemari", 3_600_000),
    ("LMR-002", "Lemari Buku Kayu", "Lemari", 1_900_000),
    ("SOF-001", "Sofa L Minimalis", "Sofa", 6_500_000),
    ("SOF-002", "Sofa Bed Lipat", "Sofa", 3_100_000),
    ("TMP-001", "Tempat Tidur Queen", "Tempat Tidur", 5_400_000),
    ("TMP-002", "Ranjang Susun Anak", "Tempat Tidur", 3_900_000),
    ("RAK-001", "Rak TV Gantung", "Rak", 950_000),
    ("RAK-002", "Rak Sepatu Susun", "Rak", 350_000),
]


# =============================================================================
# GENERATORS
# =============================================================================

class SalesDataGenerator:
    """
    Generate raw sales rows as an import collaborator would produce them.

    Example:
        generator = SalesDataGenerator(seed=42)
        rows = generator.generate(n=500, start_year=2022, years=3)
    """

    def __init__(
        self,
        seed: int = 42,
        catalogue: Optional[Sequence[Tuple[str, str, str, int]]] = None,
        columns: Optional[ColumnSettings] = None,
    ):
        self.rng = np.random.default_rng(seed)
        self.catalogue = list(catalogue or CATALOGUE)
        self.columns = columns or get_settings().columns

    def _row(self, product: Tuple[str, str, str, int], day: date) -> Dict[str, Any]:
        code, name, category, base_price = product
        quantity = int(self.rng.integers(1, 11))
        # Price drifts within +/-10% of list price, rounded to Rp 1.000
        price = int(round(base_price * self.rng.uniform(0.9, 1.1), -3))

        return {
            self.columns.product_code: code,
            self.columns.product_name: name,
            self.columns.category: category,
            self.columns.quantity_sold: quantity,
            self.columns.unit_price: price,
            self.columns.total_amount: quantity * price,
            self.columns.transaction_date: day.isoformat(),
        }

    def generate(
        self,
        n: int = 1000,
        start_year: int = 2022,
        years: int = 3,
        missing_date_rate: float = 0.0,
        malformed_rate: float = 0.0,
    ) -> List[Dict[str, Any]]:
        """
        Generate n raw rows spread uniformly over the given years.

        Args:
            n: Number of rows
            start_year: First calendar year covered
            years: Number of calendar years covered
            missing_date_rate: Share of rows whose date cell is blank
            malformed_rate: Share of rows with non-numeric quantity/price cells

        Returns:
            List of raw rows keyed by column label
        """
        start = date(start_year, 1, 1)
        span_days = (date(start_year + years, 1, 1) - start).days

        product_idx = self.rng.integers(0, len(self.catalogue), size=n)
        day_offsets = np.sort(self.rng.integers(0, span_days, size=n))
        missing = self.rng.random(n) < missing_date_rate
        malformed = self.rng.random(n) < malformed_rate

        rows = []
        for i in range(n):
            row = self._row(
                self.catalogue[int(product_idx[i])],
                start + timedelta(days=int(day_offsets[i])),
            )
            if missing[i]:
                row[self.columns.transaction_date] = ""
            if malformed[i]:
                row[self.columns.quantity_sold] = "n/a"
                row[self.columns.unit_price] = "Rp -"
            rows.append(row)

        logger.info(
            f"Generated {n} sales rows",
            start_year=start_year,
            years=years,
            missing_dates=int(missing.sum()),
            malformed=int(malformed.sum()),
        )

        return rows
