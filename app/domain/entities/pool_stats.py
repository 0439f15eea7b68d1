from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PoolSnapshot:
    address: str
    block: int
    block_time: datetime
    total_shares: str
    current_usd_balance: str


@dataclass(frozen=True)
class PoolsEntries:
    first_entry: PoolSnapshot | None = None
    last_entry: PoolSnapshot | None = None
    weekly_entry: PoolSnapshot | None = None
    yesterday_entry: PoolSnapshot | None = None


@dataclass(frozen=True)
class PoolsStats:
    address: str
    base_apy: str
    avg_apy: str
    daily_based_apr: str
    weekly_based_apr: str
    earn_multiplier: str


@dataclass(frozen=True)
class StatsWindows:
    now_date: datetime
    weekly_start: datetime
    weekly_end: datetime
    yesterday_start: datetime
    yesterday_end: datetime
