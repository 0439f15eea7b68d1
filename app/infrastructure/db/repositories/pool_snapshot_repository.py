from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.application.ports.pool_snapshot_port import PoolSnapshotPort
from app.domain.entities.pool_stats import PoolSnapshot
from app.domain.exceptions import SnapshotStoreError
from app.infrastructure.db.mappers.pool_snapshot_mapper import map_row_to_pool_snapshot

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _naive_utc(value: datetime) -> datetime:
    # "blockTime" is a timestamp without time zone holding UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def quote_table_name(table_name: str) -> str:
    if not _IDENTIFIER_RE.match(table_name):
        raise ValueError(f"Invalid snapshot table name: {table_name!r}")
    return ".".join(f'"{part}"' for part in table_name.split("."))


class SqlPoolSnapshotRepository(PoolSnapshotPort):
    def __init__(self, engine, *, table_name: str = "pools"):
        self._engine = engine
        self._table_name = table_name
        self._table = quote_table_name(table_name)

    def _select_snapshot(self) -> str:
        return f"""
            SELECT
                s.address,
                s.block,
                s."blockTime" AS block_time,
                s."totalShares" AS total_shares,
                s."currentUsdBalance" AS current_usd_balance
            FROM {self._table} s
        """

    def _fetch_snapshot(self, sql: str, params: dict[str, object]) -> PoolSnapshot | None:
        row = self._run(sql, params, first=True)
        if not row:
            return None
        return map_row_to_pool_snapshot(row)

    def _run(self, sql: str, params: dict[str, object], *, first: bool) -> Any:
        try:
            with self._engine.connect() as conn:
                result = conn.execute(text(sql), params).mappings()
                return result.first() if first else result.all()
        except SQLAlchemyError as exc:
            logger.warning(
                "pool_snapshot_repo: query failed table=%s error=%s",
                self._table_name,
                exc,
            )
            raise SnapshotStoreError(str(exc)) from exc

    def list_distinct_addresses(self) -> list[str]:
        sql = f"""
            SELECT DISTINCT s.address
            FROM {self._table} s
            WHERE s.address IS NOT NULL
            ORDER BY s.address ASC
        """
        rows: list[Mapping[str, Any]] = self._run(sql, {}, first=False)
        logger.info(
            "pool_snapshot_repo: list_distinct_addresses table=%s rows=%s",
            self._table_name,
            len(rows),
        )
        return [str(row["address"]) for row in rows]

    def find_earliest(self, *, address: str) -> PoolSnapshot | None:
        sql = self._select_snapshot() + """
            WHERE s.address = :address
            ORDER BY s."blockTime" ASC
            LIMIT 1
        """
        return self._fetch_snapshot(sql, {"address": address})

    def find_latest(self, *, address: str) -> PoolSnapshot | None:
        sql = self._select_snapshot() + """
            WHERE s.address = :address
            ORDER BY s."blockTime" DESC
            LIMIT 1
        """
        return self._fetch_snapshot(sql, {"address": address})

    def find_in_window(
        self,
        *,
        address: str,
        start: datetime,
        end: datetime,
    ) -> PoolSnapshot | None:
        sql = self._select_snapshot() + """
            WHERE s.address = :address
              AND s."blockTime" >= :start
              AND s."blockTime" < :end
            ORDER BY s."blockTime" ASC
            LIMIT 1
        """
        params = {
            "address": address,
            "start": _naive_utc(start),
            "end": _naive_utc(end),
        }
        return self._fetch_snapshot(sql, params)
