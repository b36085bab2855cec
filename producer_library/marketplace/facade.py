"""Marketplace: фасад каталога и журнала транзакций.

- Хранит идентичность продюсера (задаётся один раз при создании)
- Принимает идентичность вызывающего на каждом мутирующем вызове
- Проверяет права guard clause'ом в начале операции
- Сериализует все операции одним RLock: мутации атомарны и линеаризуемы,
  счётчики id увеличиваются внутри той же критической секции, что и вставка
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from producer_library.catalog.catalog import Catalog
from producer_library.core.config import MarketplaceConfig
from producer_library.core.contracts import validate_marketplace_state
from producer_library.core.domain.identity import Role, authorize
from producer_library.core.domain.track import Track
from producer_library.core.domain.transaction import Transaction
from producer_library.core.validation import validate_identity
from producer_library.ledger.ledger import TransactionLedger
from producer_library.payments.transfer import FundsTransfer, TimedFundsTransfer

logger = logging.getLogger(__name__)


SNAPSHOT_SCHEMA_VERSION = "1"


class Marketplace:
    """Маркетплейс треков одного продюсера.

    Пример:
        >>> from producer_library.payments import InMemoryFundsTransfer
        >>> market = Marketplace("producer", InMemoryFundsTransfer())
        >>> track = market.add_track("producer", "A", "B", 100)
        >>> tx_id = market.send_purchase_request("alice", track.id)
        >>> market.approve_purchase_request("producer", tx_id)
        >>> market.finish_purchase_request("alice", tx_id, 100)
        >>> market.get_transaction(tx_id).payment
        100
    """

    def __init__(
        self,
        producer_identity: str,
        funds_transfer: FundsTransfer,
        config: Optional[MarketplaceConfig] = None
    ):
        """
        Args:
            producer_identity: идентичность продюсера (неизменяема после создания)
            funds_transfer: внешний платёжный канал
            config: конфигурация (пагинация, таймаут перевода, проверка существования)
        """
        validate_identity(producer_identity, "producer_identity")

        self._producer_identity = producer_identity
        self.config = config or MarketplaceConfig()

        self._lock = threading.RLock()
        self._transfer = TimedFundsTransfer(
            funds_transfer, timeout_sec=self.config.transfer_timeout_sec
        )
        self._catalog = Catalog(self.config)
        self._ledger = TransactionLedger(self._catalog, producer_identity, self._transfer)

        logger.info("Marketplace initialized: producer=%r", producer_identity)

    @property
    def producer_identity(self) -> str:
        return self._producer_identity

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    def add_track(self, caller: str, title: str, artist: str, price: int) -> Track:
        self._require_producer(caller)
        with self._lock:
            return self._catalog.add_track(title, artist, price)

    def update_track(self, caller: str, track_id: int, title: str, artist: str, price: int) -> Track:
        self._require_producer(caller)
        with self._lock:
            return self._catalog.update_track(track_id, title, artist, price)

    def delete_track(self, caller: str, track_id: int) -> None:
        self._require_producer(caller)
        with self._lock:
            self._catalog.delete_track(track_id)

    def get_track(self, track_id: int) -> Track:
        """Трек по id; пустой трек, если отсутствует (никогда не бросает NotFound)."""
        with self._lock:
            return self._catalog.get_track(track_id)

    def get_tracks(self, start: int, end: int) -> List[Track]:
        with self._lock:
            return self._catalog.get_tracks(start, end)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def send_purchase_request(self, caller: str, track_id: int) -> int:
        """Запрос покупки трека покупателем. Возвращает id транзакции."""
        with self._lock:
            return self._ledger.send_purchase_request(caller, track_id)

    def approve_purchase_request(self, caller: str, transaction_id: int) -> None:
        self._require_producer(caller)
        with self._lock:
            self._ledger.approve_purchase_request(caller, transaction_id)

    def finish_purchase_request(self, caller: str, transaction_id: int, amount: int) -> None:
        """Оплата транзакции.

        Перевод средств выполняется под блокировкой: параллельная оплата
        той же транзакции увидит либо исходное, либо оплаченное состояние.
        """
        with self._lock:
            self._ledger.finish_purchase_request(caller, transaction_id, amount)

    def get_transaction(self, transaction_id: int) -> Transaction:
        with self._lock:
            return self._ledger.get_transaction(transaction_id)

    def get_transactions(self, customer_identity: Optional[str] = None) -> List[Transaction]:
        with self._lock:
            return self._ledger.transactions(customer_identity)

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Снапшот наблюдаемого состояния, валидированный по marketplace_state.json.

        Raises:
            jsonschema.ValidationError: если снапшот нарушает контракт
        """
        with self._lock:
            data = {
                "schema_version": SNAPSHOT_SCHEMA_VERSION,
                "producer_identity": self._producer_identity,
                "next_track_id": self._catalog.track_count,
                "next_transaction_id": self._ledger.transaction_count,
                "tracks": [track.model_dump(mode="json") for track in self._catalog.slots()],
                "transactions": [tx.model_dump(mode="json") for tx in self._ledger.transactions()],
            }

        validate_marketplace_state(data)
        return data

    def close(self) -> None:
        """Освобождение пула потоков платёжного канала."""
        self._transfer.close()

    def _require_producer(self, caller: str) -> None:
        validate_identity(caller)
        authorize(caller, self._producer_identity, Role.PRODUCER)
