from __future__ import annotations

import logging
from threading import Lock

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_engines: dict[str, Engine] = {}
_engines_lock = Lock()


def get_engine(dsn: str) -> Engine:
    with _engines_lock:
        engine = _engines.get(dsn)
        if engine is None:
            engine = create_engine(dsn, future=True, pool_pre_ping=True)
            _engines[dsn] = engine
        return engine


def dispose_engines() -> None:
    with _engines_lock:
        engines = list(_engines.values())
        _engines.clear()
    for engine in engines:
        engine.dispose()
    logger.info("db_engine: disposed engines=%s", len(engines))
