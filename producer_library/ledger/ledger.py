"""Transaction Ledger: журнал запросов на покупку.

Машина состояний транзакции:
- send_purchase_request: → REQUESTED (снапшот цены трека)
- approve_purchase_request: REQUESTED → APPROVED (идемпотентно, только продюсер)
- finish_purchase_request: REQUESTED | APPROVED → SETTLED (терминальное)

Settlement не требует одобрения: finish_purchase_request не проверяет
has_been_approved.

Перевод средств выполняется до любой мутации; неуспешный перевод
оставляет транзакцию без изменений, повтор безопасен.
"""

import logging
from typing import List, Optional

from producer_library.catalog.catalog import Catalog, TRACK_NOT_FOUND_MESSAGE
from producer_library.core.domain.identity import Role, authorize
from producer_library.core.domain.transaction import Transaction
from producer_library.core.errors import (
    AlreadySettledError,
    AmountMismatchError,
    ForbiddenError,
    NotFoundError,
    TransferFailedError,
)
from producer_library.core.validation import validate_identity, validate_non_negative_int
from producer_library.payments.transfer import FundsTransfer

logger = logging.getLogger(__name__)


TRANSACTION_NOT_FOUND_MESSAGE = "Transaction does not exist."


class TransactionLedger:
    """Append-only журнал транзакций.

    Транзакции никогда не удаляются; слот хранит последнюю версию
    immutable модели Transaction.
    """

    def __init__(
        self,
        catalog: Catalog,
        producer_identity: str,
        funds_transfer: FundsTransfer
    ):
        """
        Args:
            catalog: каталог (источник цены и проверки существования трека)
            producer_identity: идентичность продюсера (получатель платежей)
            funds_transfer: платёжный канал
        """
        validate_identity(producer_identity, "producer_identity")

        self.catalog = catalog
        self.producer_identity = producer_identity
        self.funds_transfer = funds_transfer

        self._transactions: List[Transaction] = []
        self._next_transaction_id: int = 0

    @property
    def transaction_count(self) -> int:
        return self._next_transaction_id

    def send_purchase_request(self, caller: str, track_id: int) -> int:
        """Создание запроса на покупку.

        Порядок проверок: NotFound (трек) → Forbidden (продюсер).
        Цена берётся из текущего слота: для удалённого трека это 0.

        Returns:
            id новой транзакции
        """
        validate_identity(caller)
        validate_non_negative_int(track_id, "track_id")

        if not self.catalog.track_exists(track_id):
            raise NotFoundError(
                TRACK_NOT_FOUND_MESSAGE,
                details={"track_id": track_id}
            )

        authorize(caller, self.producer_identity, Role.CUSTOMER)

        transaction = Transaction(
            id=self._next_transaction_id,
            customer_identity=caller,
            track_id=track_id,
            price=self.catalog.price_of(track_id),
        )
        self._transactions.append(transaction)
        self._next_transaction_id += 1

        logger.info("Purchase requested: transaction=%d customer=%r track=%d price=%d",
                    transaction.id, caller, track_id, transaction.price)
        return transaction.id

    def approve_purchase_request(self, caller: str, transaction_id: int) -> None:
        """Одобрение запроса продюсером. Повторное одобрение: no-op."""
        validate_identity(caller)
        validate_non_negative_int(transaction_id, "transaction_id")

        authorize(caller, self.producer_identity, Role.PRODUCER)
        transaction = self.get_transaction(transaction_id)

        if transaction.has_been_approved:
            logger.debug("Transaction %d already approved", transaction_id)
            return

        self._transactions[transaction_id] = transaction.approved()

        logger.info("Purchase approved: transaction=%d", transaction_id)

    def finish_purchase_request(self, caller: str, transaction_id: int, amount: int) -> None:
        """Оплата транзакции покупателем.

        Порядок проверок:
        1. NotFound: транзакция не выделялась
        2. Forbidden: вызывающий не покупатель этой транзакции
        3. AlreadySettled: транзакция уже оплачена
        4. AmountMismatch: amount != снапшот цены
        5. Перевод средств продюсеру; неуспех → TransferFailed без мутации
        """
        validate_identity(caller)
        validate_non_negative_int(transaction_id, "transaction_id")
        validate_non_negative_int(amount, "amount")

        transaction = self.get_transaction(transaction_id)

        # Forbidden проверяется раньше AlreadySettled: чужой покупатель получает
        # Forbidden и для уже оплаченной транзакции, свой получает AlreadySettled.
        # Обратный порядок сломал бы сценарий "C2 оплачивает чужую оплаченную транзакцию".
        if caller != transaction.customer_identity:
            raise ForbiddenError(
                "This is not the transaction that was made by the sender's address.",
                details={"transaction_id": transaction_id, "caller": caller}
            )

        if transaction.has_finished_payment:
            raise AlreadySettledError(
                "This transaction has already been paid for.",
                details={"transaction_id": transaction_id}
            )

        if amount != transaction.price:
            raise AmountMismatchError(
                "Amount of provided payment does not match the price of the track.",
                details={"transaction_id": transaction_id, "amount": amount, "price": transaction.price}
            )

        try:
            result = self.funds_transfer.transfer(self.producer_identity, amount)
        except Exception as e:
            logger.warning("Settlement failed: transaction=%d rail raised %s: %s",
                           transaction_id, type(e).__name__, e)
            raise TransferFailedError(
                "Funds transfer to the producer failed.",
                details={"transaction_id": transaction_id, "reason": f"transfer_error: {e}"}
            ) from e

        if not result.success:
            logger.warning("Settlement failed: transaction=%d reason=%s",
                           transaction_id, result.failure_reason)
            raise TransferFailedError(
                "Funds transfer to the producer failed.",
                details={"transaction_id": transaction_id, "reason": result.failure_reason}
            )

        self._transactions[transaction_id] = transaction.settled(amount)

        logger.info("Purchase settled: transaction=%d amount=%d reference=%s",
                    transaction_id, amount, result.reference)

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Транзакция по id.

        Raises:
            NotFoundError: если id не выделялся
        """
        validate_non_negative_int(transaction_id, "transaction_id")
        if transaction_id >= self._next_transaction_id:
            raise NotFoundError(
                TRANSACTION_NOT_FOUND_MESSAGE,
                details={"transaction_id": transaction_id}
            )
        return self._transactions[transaction_id]

    def transactions(self, customer_identity: Optional[str] = None) -> List[Transaction]:
        """Все транзакции в порядке id (опционально только одного покупателя)."""
        if customer_identity is None:
            return list(self._transactions)
        return [t for t in self._transactions if t.customer_identity == customer_identity]
