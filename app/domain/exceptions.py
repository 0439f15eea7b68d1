from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class SnapshotStoreError(DomainError):
    """Falha ao consultar os snapshots das pools."""


class NetworkNotFoundError(DomainError):
    """Rede solicitada nao esta configurada."""
