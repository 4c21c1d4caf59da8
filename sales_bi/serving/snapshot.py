"""
Snapshot Manager

Caller-side holder for the current analysis result with:
- Version tagging of every recompute
- Stale-result rejection
- Recompute on data load and year-filter change
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import structlog

from sales_bi.analytics import AnalyticsSnapshot, SalesRecord, available_years, compute_analysis
from sales_bi.config import AnalyticsSettings, get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CurrentSnapshot:
    """Published analysis result tagged with the version that produced it"""
    version: int
    year_filter: str
    snapshot: Optional[AnalyticsSnapshot]  # None when the filter matches nothing
    available_years: Tuple[str, ...] = field(default_factory=tuple)


class SnapshotManager:
    """
    Owns the version-tagged current snapshot for one dashboard session.

    Each recompute reserves a version in the same step that records the
    new data or filter. `publish()` accepts a result only if its version
    is still the latest reserved one, so a computation started before a
    newer load or filter change is discarded. `begin()` reserves a
    version for callers that drive the engine themselves.

    Example:
        manager = SnapshotManager()
        manager.load(records)
        manager.select_year("2023")
        snapshot = manager.current.snapshot
    """

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        compute: Callable[..., Optional[AnalyticsSnapshot]] = compute_analysis,
    ):
        self.settings = settings or get_settings().analytics
        self._compute = compute
        self._lock = threading.Lock()
        self._latest_version = 0
        self._records: Tuple[SalesRecord, ...] = ()
        self._year_filter = self.settings.all_years_sentinel
        self._current: Optional[CurrentSnapshot] = None

    @property
    def current(self) -> Optional[CurrentSnapshot]:
        """Latest published snapshot, or None before the first publish"""
        return self._current

    @property
    def year_filter(self) -> str:
        return self._year_filter

    @property
    def records(self) -> Tuple[SalesRecord, ...]:
        return self._records

    def begin(self) -> int:
        """Reserve a new version; any older in-flight version becomes stale"""
        version, _, _ = self._reserve()
        return version

    def _reserve(
        self,
        records: Optional[Sequence[SalesRecord]] = None,
        year_filter: Optional[str] = None,
    ) -> Tuple[int, Tuple[SalesRecord, ...], str]:
        # State change, version bump and read share one critical section
        with self._lock:
            if records is not None:
                self._records = tuple(records)
            if year_filter is not None:
                self._year_filter = year_filter
            self._latest_version += 1
            return self._latest_version, self._records, self._year_filter

    def _publish(
        self,
        version: int,
        year_filter: str,
        snapshot: Optional[AnalyticsSnapshot],
        years: Sequence[str],
    ) -> Tuple[bool, Optional[CurrentSnapshot]]:
        with self._lock:
            if version != self._latest_version:
                logger.debug(
                    "Discarding stale snapshot",
                    version=version,
                    latest_version=self._latest_version,
                )
                return False, self._current

            self._current = CurrentSnapshot(
                version=version,
                year_filter=year_filter,
                snapshot=snapshot,
                available_years=tuple(years),
            )
            return True, self._current

    def publish(
        self,
        version: int,
        year_filter: str,
        snapshot: Optional[AnalyticsSnapshot],
        years: Sequence[str] = (),
    ) -> bool:
        """
        Publish a computed snapshot.

        Args:
            version: Version returned by begin() for this computation
            year_filter: Filter the snapshot was computed with
            snapshot: Engine result
            years: Years available in the full record set

        Returns:
            True if published, False if a newer version was reserved
        """
        published, _ = self._publish(version, year_filter, snapshot, years)
        return published

    def _run(
        self,
        records: Optional[Sequence[SalesRecord]] = None,
        year_filter: Optional[str] = None,
    ) -> Optional[CurrentSnapshot]:
        version, held_records, held_filter = self._reserve(records, year_filter)
        snapshot = self._compute(held_records, held_filter, self.settings)
        _, current = self._publish(version, held_filter, snapshot, available_years(held_records))
        return current

    def refresh(self) -> Optional[CurrentSnapshot]:
        """
        Recompute from the held records and filter, then publish.

        Returns the snapshot this call published, or the newer one that
        superseded it.
        """
        return self._run()

    def load(self, records: Sequence[SalesRecord]) -> Optional[CurrentSnapshot]:
        """Replace the record set and recompute"""
        logger.info("Records loaded", records=len(records))
        return self._run(records=records)

    def select_year(self, year_filter: str) -> Optional[CurrentSnapshot]:
        """Change the active year filter and recompute"""
        logger.info("Year filter changed", year_filter=year_filter)
        return self._run(year_filter=year_filter)

    def years(self) -> List[str]:
        """Years selectable for the held record set"""
        with self._lock:
            records = self._records
        return available_years(records)
