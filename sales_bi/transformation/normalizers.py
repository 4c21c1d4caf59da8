"""
Record Normalization Module

Converts raw rows from a CSV/spreadsheet reader into SalesRecord objects.
Handles:
- Column label mapping
- Integer coercion of numeric cells (unparseable -> 0)
- Date rendering and missing-date filtering
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Tuple
import math
import numbers
import re

import structlog

from sales_bi.analytics.models import SalesRecord
from sales_bi.config import ColumnSettings, get_settings

logger = structlog.get_logger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Numeric columns are stored as Int64
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass
class NormalizationStats:
    """Statistics from a normalization pass"""
    total_rows: int
    rows_kept: int
    rows_dropped: int
    coerced_values: int  # numeric cells that fell back to 0


def _try_parse_int(value: Any) -> Optional[int]:
    parsed = _parse_integral(value)
    if parsed is None or not INT64_MIN <= parsed <= INT64_MAX:
        return None
    return parsed


def _parse_integral(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_int(value: Any) -> int:
    """
    Parse a cell as an integer, falling back to 0.

    Strings keep their leading integer part ("12 unit" -> 12, "3.7" -> 3);
    floats and decimals truncate toward zero. Values outside the signed
    64-bit range count as unparseable.
    """
    parsed = _try_parse_int(value)
    return 0 if parsed is None else parsed


def parse_date(value: Any) -> Optional[str]:
    """Render a date cell as text; None when the cell is empty"""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    return text or None


def _parse_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return str(value)


class RecordNormalizer:
    """
    Maps raw key-value rows onto SalesRecord.

    Rows without a transaction date are dropped. Record ids keep the
    position of the row in the raw sequence, so dropped rows leave gaps.

    Example:
        normalizer = RecordNormalizer()
        records = normalizer.normalize(rows)
        print(normalizer.last_stats)
    """

    def __init__(self, columns: Optional[ColumnSettings] = None):
        self.columns = columns or get_settings().columns
        self.last_stats: Optional[NormalizationStats] = None

    def _numeric(self, row: Mapping[str, Any], field: str) -> Tuple[int, bool]:
        """Parse a numeric cell; the flag is set when a present value fell back to 0"""
        value = row.get(self.columns.labels[field])
        parsed = _try_parse_int(value)
        if parsed is None:
            return 0, value is not None
        return parsed, False

    def _convert(self, row: Mapping[str, Any], index: int) -> Tuple[Optional[SalesRecord], int]:
        labels = self.columns.labels
        transaction_date = parse_date(row.get(labels["transaction_date"]))
        if transaction_date is None:
            return None, 0

        quantity, quantity_coerced = self._numeric(row, "quantity_sold")
        price, price_coerced = self._numeric(row, "unit_price")
        total, total_coerced = self._numeric(row, "total_amount")

        record = SalesRecord(
            id=index + 1,
            product_code=_parse_text(row.get(labels["product_code"])),
            product_name=_parse_text(row.get(labels["product_name"])),
            category=_parse_text(row.get(labels["category"])),
            quantity_sold=quantity,
            unit_price=price,
            total_amount=total,
            transaction_date=transaction_date,
        )
        return record, quantity_coerced + price_coerced + total_coerced

    def normalize_row(self, row: Mapping[str, Any], index: int) -> Optional[SalesRecord]:
        """
        Normalize one raw row.

        Args:
            row: Mapping of column label to cell value
            index: 0-based position of the row in the raw sequence

        Returns:
            SalesRecord, or None if the row has no transaction date
        """
        record, _ = self._convert(row, index)
        return record

    def normalize(self, rows: Iterable[Mapping[str, Any]]) -> List[SalesRecord]:
        """Normalize a raw row sequence, dropping rows without a date"""
        records = []
        total_rows = 0
        coerced_values = 0

        for index, row in enumerate(rows):
            total_rows += 1
            record, coerced = self._convert(row, index)
            coerced_values += coerced
            if record is None:
                logger.debug("Dropping row without transaction date", row_id=index + 1)
                continue
            records.append(record)

        self.last_stats = NormalizationStats(
            total_rows=total_rows,
            rows_kept=len(records),
            rows_dropped=total_rows - len(records),
            coerced_values=coerced_values,
        )

        logger.info(
            f"Normalized {len(records)} of {total_rows} rows",
            rows_dropped=self.last_stats.rows_dropped,
            coerced_values=coerced_values,
        )

        return records


def normalize_records(
    rows: Iterable[Mapping[str, Any]],
    columns: Optional[ColumnSettings] = None,
) -> List[SalesRecord]:
    """
    Convenience function to normalize raw rows.

    Args:
        rows: Raw rows from the import collaborator
        columns: Column labels; defaults to configured labels

    Returns:
        Normalized records in input order
    """
    return RecordNormalizer(columns).normalize(rows)
