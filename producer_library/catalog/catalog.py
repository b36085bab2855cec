"""Catalog: таблица треков продюсера.

- Выделение id (монотонно с 0, без переиспользования)
- Обновление и удаление по правилу существования (ExistenceCheck)
- Точечное чтение и постраничная выдача с жёстким потолком end

Права (только продюсер мутирует каталог) проверяет фасад Marketplace.
Catalog не потокобезопасен сам по себе: сериализацию обеспечивает фасад.
"""

import logging
from typing import Dict, List, Optional

from producer_library.core.config import ExistenceCheck, MarketplaceConfig
from producer_library.core.domain.track import Track
from producer_library.core.errors import (
    NotFoundError,
    OutOfRangeError,
    PaginationLimitExceededError,
)
from producer_library.core.validation import validate_non_negative_int, validate_text

logger = logging.getLogger(__name__)


TRACK_NOT_FOUND_MESSAGE = "Track does not exist."


class Catalog:
    """Каталог треков.

    Слоты хранятся в таблице по id. Удалённый слот содержит Track.empty()
    и остаётся в таблице: id повторно не выдаётся.
    """

    def __init__(self, config: Optional[MarketplaceConfig] = None):
        self.config = config or MarketplaceConfig()

        self._tracks: Dict[int, Track] = {}
        self._next_track_id: int = 0

    @property
    def track_count(self) -> int:
        """Количество когда-либо выделенных id (next_track_id)."""
        return self._next_track_id

    def track_exists(self, track_id: int) -> bool:
        """Проверка существования трека по правилу из конфигурации.

        ALLOCATED (по умолчанию): id когда-либо выделялся, удалённые треки
        считаются существующими. LIVE: слот не удалён.
        """
        if self.config.existence_check == ExistenceCheck.LIVE:
            return track_id in self._tracks and self._tracks[track_id].is_live()
        return track_id < self._next_track_id

    def add_track(self, title: str, artist: str, price: int) -> Track:
        validate_text(title, "title")
        validate_text(artist, "artist")
        validate_non_negative_int(price, "price")

        track = Track(id=self._next_track_id, title=title, artist=artist, price=price)
        self._tracks[track.id] = track
        self._next_track_id += 1

        logger.info("Track added: id=%d title=%r artist=%r price=%d",
                    track.id, title, artist, price)
        return track

    def update_track(self, track_id: int, title: str, artist: str, price: int) -> Track:
        """Замена всех полей трека (id сохраняется).

        Raises:
            NotFoundError: если трек не проходит проверку существования
        """
        validate_non_negative_int(track_id, "track_id")
        validate_text(title, "title")
        validate_text(artist, "artist")
        validate_non_negative_int(price, "price")
        self._require_exists(track_id)

        track = Track(id=track_id, title=title, artist=artist, price=price)
        self._tracks[track_id] = track

        logger.info("Track updated: id=%d title=%r artist=%r price=%d",
                    track_id, title, artist, price)
        return track

    def delete_track(self, track_id: int) -> None:
        """Обнуление слота трека.

        Повторное удаление того же id успешно и снова пишет пустой слот.

        Raises:
            NotFoundError: если трек не проходит проверку существования
        """
        validate_non_negative_int(track_id, "track_id")
        self._require_exists(track_id)

        self._tracks[track_id] = Track.empty()

        logger.info("Track deleted: id=%d", track_id)

    def get_track(self, track_id: int) -> Track:
        """Трек по id; пустой трек, если id не выделялся или удалён. Не бросает NotFound."""
        validate_non_negative_int(track_id, "track_id")
        return self._tracks.get(track_id, Track.empty())

    def get_tracks(self, start: int, end: int) -> List[Track]:
        """Слоты треков с индексами [start, min(end, track_count)) в порядке id.

        Порядок проверок:
        1. end >= pagination_limit → PaginationLimitExceededError (даже при пустом каталоге)
        2. start >= track_count → OutOfRangeError
        3. end усекается до track_count
        4. start > end после усечения → OutOfRangeError
        """
        validate_non_negative_int(start, "start")
        validate_non_negative_int(end, "end")

        if end >= self.config.pagination_limit:
            raise PaginationLimitExceededError(
                "End index is more than the maximum possible entry for a paginated response.",
                details={"end": end, "pagination_limit": self.config.pagination_limit}
            )

        if start >= self._next_track_id:
            raise OutOfRangeError(
                "Start index is out of bounds.",
                details={"start": start, "track_count": self._next_track_id}
            )

        end = min(end, self._next_track_id)

        if start > end:
            raise OutOfRangeError(
                "Start index is greater than end index.",
                details={"start": start, "end": end}
            )

        logger.debug("Listing tracks [%d, %d)", start, end)
        return [self._tracks[track_id] for track_id in range(start, end)]

    def price_of(self, track_id: int) -> int:
        """Текущая цена слота (0 для удалённого трека)."""
        return self._tracks.get(track_id, Track.empty()).price

    def slots(self) -> List[Track]:
        """Все выделенные слоты в порядке id (для снапшота)."""
        return [self._tracks[track_id] for track_id in range(self._next_track_id)]

    def _require_exists(self, track_id: int) -> None:
        if not self.track_exists(track_id):
            raise NotFoundError(
                TRACK_NOT_FOUND_MESSAGE,
                details={"track_id": track_id, "track_count": self._next_track_id}
            )
