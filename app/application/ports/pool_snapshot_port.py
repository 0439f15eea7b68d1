from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.pool_stats import PoolSnapshot


class PoolSnapshotPort(Protocol):
    def list_distinct_addresses(self) -> list[str]:
        ...

    def find_earliest(self, *, address: str) -> PoolSnapshot | None:
        ...

    def find_latest(self, *, address: str) -> PoolSnapshot | None:
        ...

    def find_in_window(
        self,
        *,
        address: str,
        start: datetime,
        end: datetime,
    ) -> PoolSnapshot | None:
        ...
