from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from app.application.ports.pool_snapshot_port import PoolSnapshotPort
from app.domain.entities.pool_stats import PoolsEntries, PoolsStats
from app.domain.services.pool_stats import compute_pool_stats, stats_windows

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetPoolStatsUseCase:
    def __init__(
        self,
        *,
        snapshot_port: PoolSnapshotPort,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._snapshot_port = snapshot_port
        self._clock = clock

    def load_entries(self, *, address: str, now: datetime) -> PoolsEntries:
        windows = stats_windows(now)
        return PoolsEntries(
            first_entry=self._snapshot_port.find_earliest(address=address),
            last_entry=self._snapshot_port.find_latest(address=address),
            weekly_entry=self._snapshot_port.find_in_window(
                address=address,
                start=windows.weekly_start,
                end=windows.weekly_end,
            ),
            yesterday_entry=self._snapshot_port.find_in_window(
                address=address,
                start=windows.yesterday_start,
                end=windows.yesterday_end,
            ),
        )

    def compute_stats(self, *, address: str, now: datetime | None = None) -> PoolsStats:
        reference = now if now is not None else self._clock()
        entries = self.load_entries(address=address, now=reference)
        stats = compute_pool_stats(address, entries)
        logger.debug(
            "pool_stats: address=%s base_apy=%s avg_apy=%s",
            address,
            stats.base_apy,
            stats.avg_apy,
        )
        return stats

    def execute(self, *, now: datetime | None = None) -> list[PoolsStats]:
        reference = now if now is not None else self._clock()
        addresses = self._snapshot_port.list_distinct_addresses()
        stats = [self.compute_stats(address=address, now=reference) for address in addresses]
        logger.info("pool_stats: computed addresses=%s now=%s", len(stats), reference.isoformat())
        return stats
