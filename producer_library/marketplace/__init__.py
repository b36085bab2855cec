"""Marketplace: единый фасад каталога и журнала транзакций."""

from .facade import Marketplace, SNAPSHOT_SCHEMA_VERSION

__all__ = [
    "Marketplace",
    "SNAPSHOT_SCHEMA_VERSION",
]
