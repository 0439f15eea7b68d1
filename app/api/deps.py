from __future__ import annotations

from fastapi import HTTPException

from app.application.use_cases.get_network_pool_stats import GetNetworkPoolStatsUseCase
from app.application.use_cases.get_pool_stats import GetPoolStatsUseCase
from app.infrastructure.db.engine import get_engine
from app.infrastructure.db.repositories.pool_snapshot_repository import SqlPoolSnapshotRepository
from app.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_snapshot_repositories() -> dict[str, SqlPoolSnapshotRepository]:
    settings = get_settings()
    engine = _get_db_engine()
    return {
        network: SqlPoolSnapshotRepository(engine, table_name=table_name)
        for network, table_name in settings.snapshot_tables.items()
    }


def missing_default_network_detail(network: str) -> str:
    return f"DEFAULT_NETWORK '{network}' has no snapshot table."


def get_default_network() -> str:
    return get_settings().default_network


def get_pool_stats_use_case() -> GetPoolStatsUseCase:
    settings = get_settings()
    repositories = _get_snapshot_repositories()
    repository = repositories.get(settings.default_network)
    if repository is None:
        raise HTTPException(
            status_code=500,
            detail=missing_default_network_detail(settings.default_network),
        )
    return GetPoolStatsUseCase(snapshot_port=repository)


def get_network_pool_stats_use_case() -> GetNetworkPoolStatsUseCase:
    return GetNetworkPoolStatsUseCase(snapshot_ports=_get_snapshot_repositories())
