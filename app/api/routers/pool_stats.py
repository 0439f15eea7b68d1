from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import (
    get_default_network,
    get_network_pool_stats_use_case,
    get_pool_stats_use_case,
    missing_default_network_detail,
)
from app.api.schemas.pool_stats import PoolStatsResponse
from app.application.dto.pool_stats import GetNetworkPoolStatsInput
from app.application.use_cases.get_network_pool_stats import GetNetworkPoolStatsUseCase
from app.application.use_cases.get_pool_stats import GetPoolStatsUseCase
from app.domain.entities.pool_stats import PoolsStats
from app.domain.exceptions import NetworkNotFoundError, SnapshotStoreError

router = APIRouter()


def _to_response(row: PoolsStats) -> PoolStatsResponse:
    return PoolStatsResponse(
        address=row.address,
        base_apy=row.base_apy,
        avg_apy=row.avg_apy,
        daily_based_apr=row.daily_based_apr,
        weekly_based_apr=row.weekly_based_apr,
        earn_multiplier=row.earn_multiplier,
    )


def _network_stats(
    use_case: GetNetworkPoolStatsUseCase,
    network: str | None,
) -> dict[str, list[PoolStatsResponse]]:
    try:
        result = use_case.execute(GetNetworkPoolStatsInput(network=network))
    except NetworkNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SnapshotStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {
        name: [_to_response(row) for row in rows]
        for name, rows in result.stats_by_network.items()
    }


@router.get("/api/stats", response_model=list[PoolStatsResponse])
def get_stats(
    use_case: GetPoolStatsUseCase = Depends(get_pool_stats_use_case),
):
    try:
        rows = use_case.execute()
    except SnapshotStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return [_to_response(row) for row in rows]


@router.get("/v1/pool-stats", response_model=list[PoolStatsResponse])
def get_pool_stats(
    network: str | None = None,
    default_network: str = Depends(get_default_network),
    use_case: GetNetworkPoolStatsUseCase = Depends(get_network_pool_stats_use_case),
):
    if network is None:
        try:
            result = use_case.execute(GetNetworkPoolStatsInput(network=default_network))
        except NetworkNotFoundError as exc:
            detail = missing_default_network_detail(default_network)
            raise HTTPException(status_code=500, detail=detail) from exc
        except SnapshotStoreError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return [_to_response(row) for row in result.stats_by_network[default_network]]
    return _network_stats(use_case, network)[network]


@router.get("/v1/pool-stats/networks", response_model=dict[str, list[PoolStatsResponse]])
def get_pool_stats_by_network(
    network: str | None = None,
    use_case: GetNetworkPoolStatsUseCase = Depends(get_network_pool_stats_use_case),
):
    return _network_stats(use_case, network)
