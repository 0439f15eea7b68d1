from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.pool_stats import PoolsStats


@dataclass(frozen=True)
class GetNetworkPoolStatsInput:
    network: str | None = None


@dataclass(frozen=True)
class GetNetworkPoolStatsOutput:
    stats_by_network: dict[str, list[PoolsStats]]
