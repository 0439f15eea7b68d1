from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime

from app.application.dto.pool_stats import GetNetworkPoolStatsInput, GetNetworkPoolStatsOutput
from app.application.ports.pool_snapshot_port import PoolSnapshotPort
from app.application.use_cases.get_pool_stats import GetPoolStatsUseCase, utc_now
from app.domain.exceptions import NetworkNotFoundError


class GetNetworkPoolStatsUseCase:
    def __init__(
        self,
        *,
        snapshot_ports: Mapping[str, PoolSnapshotPort],
        clock: Callable[[], datetime] = utc_now,
    ):
        self._snapshot_ports = dict(snapshot_ports)
        self._clock = clock

    def execute(self, command: GetNetworkPoolStatsInput) -> GetNetworkPoolStatsOutput:
        if command.network is not None:
            if command.network not in self._snapshot_ports:
                raise NetworkNotFoundError(f"Network '{command.network}' is not configured.")
            networks = [command.network]
        else:
            networks = list(self._snapshot_ports)

        now = self._clock()
        stats_by_network = {}
        for network in networks:
            use_case = GetPoolStatsUseCase(snapshot_port=self._snapshot_ports[network])
            stats_by_network[network] = use_case.execute(now=now)
        return GetNetworkPoolStatsOutput(stats_by_network=stats_by_network)
