from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.entities.pool_stats import PoolSnapshot
from app.domain.services.pool_stats import as_utc


def map_row_to_pool_snapshot(row: Mapping[str, Any]) -> PoolSnapshot:
    return PoolSnapshot(
        address=str(row["address"]),
        block=int(row["block"]) if row["block"] is not None else 0,
        block_time=as_utc(row["block_time"]),
        total_shares=str(row["total_shares"]) if row["total_shares"] is not None else "0",
        current_usd_balance=(
            str(row["current_usd_balance"]) if row["current_usd_balance"] is not None else "0"
        ),
    )
