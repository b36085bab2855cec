"""Тесты для Catalog.

Coverage:
- Выделение id (монотонно с 0)
- update/delete по правилу "id когда-либо выделялся"
- Повторное удаление
- get_track для отсутствующих и удалённых треков
- Пагинация: потолок, выход за границы, усечение end
- Вариант проверки существования LIVE
"""

import pytest

from producer_library.catalog import Catalog, TRACK_NOT_FOUND_MESSAGE
from producer_library.core.config import ExistenceCheck, MarketplaceConfig
from producer_library.core.domain import Track, TrackStatus
from producer_library.core.errors import (
    NotFoundError,
    OutOfRangeError,
    PaginationLimitExceededError,
)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


class TestAddTrack:
    """Тесты add_track."""

    def test_first_track_gets_id_zero(self, catalog):
        track = catalog.add_track("Into Your Arms", "Ava Max", 10)

        assert track == Track(id=0, title="Into Your Arms", artist="Ava Max", price=10)
        assert catalog.track_count == 1

    def test_ids_strictly_increasing(self, catalog):
        ids = [catalog.add_track(f"T{i}", "A", i).id for i in range(5)]
        assert ids == [0, 1, 2, 3, 4]

    def test_get_track_returns_stored_fields(self, catalog):
        catalog.add_track("Into Your Arms", "Ava Max", 10)
        catalog.add_track("A Sky Full Of Stars", "Coldplay", 50)

        second = catalog.get_track(1)
        assert second.id == 1
        assert second.title == "A Sky Full Of Stars"
        assert second.artist == "Coldplay"
        assert second.price == 50

    def test_duplicate_titles_allowed(self, catalog):
        catalog.add_track("Same", "Same", 1)
        catalog.add_track("Same", "Same", 1)
        assert catalog.track_count == 2

    def test_invalid_price_rejected(self, catalog):
        with pytest.raises(ValueError):
            catalog.add_track("T", "A", -5)
        assert catalog.track_count == 0


class TestUpdateTrack:
    """Тесты update_track."""

    def test_replaces_all_fields(self, catalog):
        catalog.add_track("Old Track Title", "Old Artist", 1)

        updated = catalog.update_track(0, "New Track Title", "New Artist", 2)

        assert updated.id == 0
        assert catalog.get_track(0) == Track(id=0, title="New Track Title", artist="New Artist", price=2)

    def test_unallocated_id_not_found(self, catalog):
        catalog.add_track("T", "A", 1)

        with pytest.raises(NotFoundError) as exc_info:
            catalog.update_track(999, "Invalid Track", "Invalid Artist", 3)

        assert exc_info.value.message == TRACK_NOT_FOUND_MESSAGE

    def test_id_equal_to_counter_not_found(self, catalog):
        catalog.add_track("T", "A", 1)
        with pytest.raises(NotFoundError):
            catalog.update_track(1, "T", "A", 1)

    def test_update_after_delete_succeeds(self, catalog):
        """Удалённый id по-прежнему доступен для update"""
        catalog.add_track("T", "A", 1)
        catalog.delete_track(0)

        revived = catalog.update_track(0, "Back", "Again", 7)

        assert revived.status == TrackStatus.LIVE
        assert catalog.get_track(0).title == "Back"


class TestDeleteTrack:
    """Тесты delete_track."""

    def test_resets_slot(self, catalog):
        catalog.add_track("Track Title", "Artist", 1)
        catalog.delete_track(0)

        track = catalog.get_track(0)
        assert track.title == ""
        assert track.artist == ""
        assert track.price == 0
        assert track.status == TrackStatus.DELETED

    def test_id_not_reused(self, catalog):
        catalog.add_track("T0", "A", 1)
        catalog.delete_track(0)

        assert catalog.add_track("T1", "A", 1).id == 1

    def test_second_delete_succeeds_silently(self, catalog):
        catalog.add_track("T", "A", 1)
        catalog.delete_track(0)
        catalog.delete_track(0)

        assert catalog.get_track(0).is_empty()

    def test_unallocated_id_not_found(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.delete_track(999)


class TestGetTrack:
    """Тесты get_track."""

    def test_unknown_id_returns_empty(self, catalog):
        track = catalog.get_track(999)
        assert track.is_empty()

    def test_price_of_deleted_is_zero(self, catalog):
        catalog.add_track("T", "A", 40)
        catalog.delete_track(0)
        assert catalog.price_of(0) == 0


class TestGetTracks:
    """Тесты get_tracks (пагинация)."""

    def test_returns_range_in_id_order(self, catalog):
        catalog.add_track("Track Title 1", "Artist 1", 1)
        catalog.add_track("Track Title 2", "Artist 2", 1)

        tracks = catalog.get_tracks(0, 2)

        assert [t.title for t in tracks] == ["Track Title 1", "Track Title 2"]

    def test_start_out_of_bounds(self, catalog):
        catalog.add_track("T", "A", 1)

        with pytest.raises(OutOfRangeError) as exc_info:
            catalog.get_tracks(999, 2)

        assert exc_info.value.message == "Start index is out of bounds."

    def test_pagination_limit_with_tracks(self, catalog):
        catalog.add_track("T", "A", 1)
        with pytest.raises(PaginationLimitExceededError):
            catalog.get_tracks(0, 10000)

    def test_pagination_limit_with_empty_catalog(self, catalog):
        """Потолок проверяется раньше границ: ошибка даже без треков"""
        with pytest.raises(PaginationLimitExceededError):
            catalog.get_tracks(0, 100)

    def test_end_99_is_allowed(self, catalog):
        catalog.add_track("T", "A", 1)
        assert len(catalog.get_tracks(0, 99)) == 1

    def test_end_clamped_to_track_count(self, catalog):
        catalog.add_track("Track Title", "Artist", 1)

        tracks = catalog.get_tracks(0, 2)

        assert len(tracks) == 1
        assert tracks[0].title == "Track Title"

    def test_empty_when_start_equals_end(self, catalog):
        catalog.add_track("T0", "A", 1)
        catalog.add_track("T1", "A", 1)
        assert catalog.get_tracks(1, 1) == []

    def test_start_after_end_out_of_range(self, catalog):
        for i in range(3):
            catalog.add_track(f"T{i}", "A", 1)
        with pytest.raises(OutOfRangeError):
            catalog.get_tracks(2, 1)

    def test_deleted_slots_listed_as_empty(self, catalog):
        catalog.add_track("T0", "A", 1)
        catalog.add_track("T1", "A", 1)
        catalog.delete_track(0)

        tracks = catalog.get_tracks(0, 2)

        assert tracks[0].is_empty()
        assert tracks[1].title == "T1"

    def test_empty_catalog_start_zero_out_of_range(self, catalog):
        with pytest.raises(OutOfRangeError):
            catalog.get_tracks(0, 5)

    def test_custom_pagination_limit(self):
        catalog = Catalog(MarketplaceConfig(pagination_limit=3))
        for i in range(5):
            catalog.add_track(f"T{i}", "A", 1)

        assert len(catalog.get_tracks(0, 2)) == 2
        with pytest.raises(PaginationLimitExceededError):
            catalog.get_tracks(0, 3)


class TestExistenceCheck:
    """Тесты правила существования трека."""

    def test_allocated_treats_deleted_as_existing(self, catalog):
        catalog.add_track("T", "A", 1)
        catalog.delete_track(0)

        assert catalog.track_exists(0)
        assert not catalog.track_exists(1)

    def test_live_treats_deleted_as_missing(self):
        catalog = Catalog(MarketplaceConfig(existence_check=ExistenceCheck.LIVE))
        catalog.add_track("T", "A", 1)
        catalog.delete_track(0)

        assert not catalog.track_exists(0)
        with pytest.raises(NotFoundError):
            catalog.update_track(0, "T", "A", 1)
        with pytest.raises(NotFoundError):
            catalog.delete_track(0)
