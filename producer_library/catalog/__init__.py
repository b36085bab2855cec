"""Catalog: таблица треков и постраничная выдача."""

from .catalog import Catalog, TRACK_NOT_FOUND_MESSAGE

__all__ = [
    "Catalog",
    "TRACK_NOT_FOUND_MESSAGE",
]
