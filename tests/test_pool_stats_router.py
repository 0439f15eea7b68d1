from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.deps import (
    get_default_network,
    get_network_pool_stats_use_case,
    get_pool_stats_use_case,
)
from app.application.dto.pool_stats import GetNetworkPoolStatsOutput
from app.domain.entities.pool_stats import PoolsStats
from app.domain.exceptions import NetworkNotFoundError, SnapshotStoreError
from app.main import app

ROW = PoolsStats(
    address="0xpool",
    base_apy="10.000000",
    avg_apy="calculating..",
    daily_based_apr="calculating..",
    weekly_based_apr="calculating..",
    earn_multiplier="0",
)


@pytest.fixture(autouse=True)
def _clear_dependency_overrides():
    yield
    app.dependency_overrides.clear()


class FakeGetPoolStatsUseCase:
    def execute(self):
        return [ROW]


class FailingGetPoolStatsUseCase:
    def execute(self):
        raise SnapshotStoreError("could not connect to server")


class FakeGetNetworkPoolStatsUseCase:
    def execute(self, command):
        if command.network == "unknown":
            raise NetworkNotFoundError("Network 'unknown' is not configured.")
        if command.network is None:
            return GetNetworkPoolStatsOutput(stats_by_network={"ethereum": [ROW], "polygon": []})
        return GetNetworkPoolStatsOutput(stats_by_network={command.network: [ROW]})


def test_legacy_stats_returns_camel_case_rows():
    app.dependency_overrides[get_pool_stats_use_case] = lambda: FakeGetPoolStatsUseCase()

    client = TestClient(app)
    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == [
        {
            "address": "0xpool",
            "baseApy": "10.000000",
            "avgApy": "calculating..",
            "dailyBasedApr": "calculating..",
            "weeklyBasedApr": "calculating..",
            "earnMultiplier": "0",
        }
    ]


def test_store_failure_returns_single_error_message():
    app.dependency_overrides[get_pool_stats_use_case] = lambda: FailingGetPoolStatsUseCase()

    client = TestClient(app)
    response = client.get("/api/stats")

    assert response.status_code == 500
    assert response.json() == {"detail": "could not connect to server"}


def test_pool_stats_uses_default_network_when_omitted():
    app.dependency_overrides[get_default_network] = lambda: "arbitrum"
    app.dependency_overrides[get_network_pool_stats_use_case] = (
        lambda: FakeGetNetworkPoolStatsUseCase()
    )

    client = TestClient(app)
    response = client.get("/v1/pool-stats")

    assert response.status_code == 200
    assert [row["address"] for row in response.json()] == ["0xpool"]


def test_pool_stats_by_network_returns_mapping():
    app.dependency_overrides[get_network_pool_stats_use_case] = (
        lambda: FakeGetNetworkPoolStatsUseCase()
    )

    client = TestClient(app)
    response = client.get("/v1/pool-stats/networks")

    assert response.status_code == 200
    payload = response.json()
    assert list(payload) == ["ethereum", "polygon"]
    assert payload["ethereum"][0]["baseApy"] == "10.000000"
    assert payload["polygon"] == []


def test_unknown_network_returns_404():
    app.dependency_overrides[get_network_pool_stats_use_case] = (
        lambda: FakeGetNetworkPoolStatsUseCase()
    )

    client = TestClient(app)
    response = client.get("/v1/pool-stats", params={"network": "unknown"})

    assert response.status_code == 404


def test_unconfigured_default_network_is_reported_alike_on_both_routes(monkeypatch):
    monkeypatch.setenv("POSTGRES_DSN", "sqlite://")
    monkeypatch.setenv("SNAPSHOT_TABLES", '{"ethereum": "pools_eth"}')
    monkeypatch.setenv("DEFAULT_NETWORK", "unknown")
    expected = {"detail": "DEFAULT_NETWORK 'unknown' has no snapshot table."}

    client = TestClient(app)
    legacy = client.get("/api/stats")
    current = client.get("/v1/pool-stats")

    assert legacy.status_code == 500
    assert current.status_code == 500
    assert legacy.json() == expected
    assert current.json() == expected


def test_explicit_unknown_network_is_still_404_when_default_is_broken():
    app.dependency_overrides[get_default_network] = lambda: "unknown"
    app.dependency_overrides[get_network_pool_stats_use_case] = (
        lambda: FakeGetNetworkPoolStatsUseCase()
    )

    client = TestClient(app)
    response = client.get("/v1/pool-stats", params={"network": "unknown"})

    assert response.status_code == 404
