"""
Тесты для доменных моделей: Track, Transaction, роли

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Immutability (frozen=True)
3. Пустой трек
4. Инвариант payment (0 либо price)
5. Вычисляемое состояние транзакции
6. Guard clause авторизации
"""

import pytest
from pydantic import ValidationError

from producer_library.core.domain import (
    PRODUCER_ONLY_MESSAGE,
    Role,
    Track,
    TrackStatus,
    Transaction,
    TransactionState,
    authorize,
    resolve_role,
)
from producer_library.core.errors import ForbiddenError


# =============================================================================
# TRACK TESTS
# =============================================================================


class TestTrack:
    """Тесты для модели Track"""

    @pytest.fixture
    def track(self) -> Track:
        return Track(id=0, title="Into Your Arms", artist="Ava Max", price=10)

    def test_defaults_to_live(self, track):
        assert track.status == TrackStatus.LIVE
        assert track.is_live()
        assert not track.is_empty()

    def test_immutable(self, track):
        with pytest.raises(ValidationError):
            track.price = 20

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Track(id=0, title="T", artist="A", price=-1)

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Track(id=-1, title="T", artist="A", price=1)

    def test_empty_track(self):
        """Пустой трек: все поля нулевые, статус DELETED"""
        empty = Track.empty()

        assert empty.id == 0
        assert empty.title == ""
        assert empty.artist == ""
        assert empty.price == 0
        assert empty.status == TrackStatus.DELETED
        assert empty.is_empty()
        assert not empty.is_live()

    def test_free_track_with_id_zero_is_empty_by_fields(self):
        """Отсутствие определяется по полям: трек id=0 с пустыми полями неотличим"""
        track = Track(id=0, title="", artist="", price=0)
        assert track.is_empty()
        assert track.is_live()

    def test_json_serialization(self, track):
        data = track.model_dump(mode="json")
        assert data == {
            "id": 0,
            "title": "Into Your Arms",
            "artist": "Ava Max",
            "price": 10,
            "status": "live",
        }


# =============================================================================
# TRANSACTION TESTS
# =============================================================================


class TestTransaction:
    """Тесты для модели Transaction"""

    @pytest.fixture
    def requested(self) -> Transaction:
        return Transaction(id=0, customer_identity="alice", track_id=3, price=100)

    def test_new_transaction_is_requested(self, requested):
        assert requested.payment == 0
        assert not requested.has_been_approved
        assert not requested.has_finished_payment
        assert requested.state == TransactionState.REQUESTED

    def test_approved_returns_new_instance(self, requested):
        approved = requested.approved()

        assert approved.has_been_approved
        assert approved.state == TransactionState.APPROVED
        assert not requested.has_been_approved  # Исходный экземпляр не изменён

    def test_settled_sets_payment(self, requested):
        settled = requested.approved().settled(100)

        assert settled.payment == 100
        assert settled.has_finished_payment
        assert settled.has_been_approved
        assert settled.state == TransactionState.SETTLED

    def test_settled_without_approval(self, requested):
        """Settlement не требует одобрения"""
        settled = requested.settled(100)

        assert settled.state == TransactionState.SETTLED
        assert not settled.has_been_approved

    def test_partial_payment_not_representable(self, requested):
        with pytest.raises(ValidationError):
            requested.settled(50)

    def test_unsettled_payment_must_be_zero(self):
        with pytest.raises(ValidationError):
            Transaction(id=0, customer_identity="alice", track_id=0, price=100, payment=100)

    def test_empty_customer_rejected(self):
        with pytest.raises(ValidationError):
            Transaction(id=0, customer_identity="", track_id=0, price=100)

    def test_immutable(self, requested):
        with pytest.raises(ValidationError):
            requested.has_been_approved = True

    def test_zero_price_settlement(self):
        tx = Transaction(id=1, customer_identity="bob", track_id=0, price=0)
        settled = tx.settled(0)

        assert settled.payment == 0
        assert settled.state == TransactionState.SETTLED


# =============================================================================
# IDENTITY TESTS
# =============================================================================


class TestIdentity:
    """Тесты ролей и авторизации"""

    def test_resolve_role(self):
        assert resolve_role("producer", "producer") == Role.PRODUCER
        assert resolve_role("alice", "producer") == Role.CUSTOMER

    def test_authorize_producer_passes(self):
        authorize("producer", "producer", Role.PRODUCER)

    def test_authorize_customer_for_producer_role_fails(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize("alice", "producer", Role.PRODUCER)

        assert exc_info.value.message == PRODUCER_ONLY_MESSAGE
        assert exc_info.value.details["required_role"] == "producer"

    def test_authorize_producer_for_customer_role_fails(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize("producer", "producer", Role.CUSTOMER)

        assert exc_info.value.message == "The producer cannot submit a purchase request."
