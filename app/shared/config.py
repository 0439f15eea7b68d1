from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    return json.loads(value)


def _csv(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    snapshot_tables: dict[str, str]
    default_network: str
    cors_allow_origins: list[str]
    log_level: str


def get_settings() -> Settings:
    snapshot_tables = {str(k): str(v) for k, v in _json("SNAPSHOT_TABLES").items()}
    if not snapshot_tables:
        snapshot_tables = {"default": "pools"}
    default_network = _env("DEFAULT_NETWORK", "") or next(iter(snapshot_tables))
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        snapshot_tables=snapshot_tables,
        default_network=default_network,
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
