"""
Transaction: Модель запроса на покупку

Immutable Pydantic модель. Переходы состояния создают новый экземпляр
(approve / settle), журнал хранит только последнюю версию.

Инвариант: payment == 0 (не оплачено) либо payment == price (оплачено).
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class TransactionState(str, Enum):
    """
    Состояние транзакции.

    REQUESTED --approve--> APPROVED (повторное approve ничего не меняет)
    REQUESTED | APPROVED --settle--> SETTLED (терминальное)
    """

    REQUESTED = "requested"
    APPROVED = "approved"
    SETTLED = "settled"


# =============================================================================
# TRANSACTION MODEL
# =============================================================================


class Transaction(BaseModel):
    """
    Модель транзакции покупки трека.

    price хранит снапшот цены трека на момент запроса, поэтому последующие правки
    и удаление трека не меняют уже созданные транзакции.
    """

    # Идентификация
    id: int = Field(..., ge=0, description="Идентификатор транзакции (последовательный)")
    customer_identity: str = Field(..., min_length=1, description="Идентичность покупателя")
    track_id: int = Field(..., ge=0, description="Слабая ссылка на Track.id")

    # Деньги
    payment: int = Field(0, ge=0, description="Фактически полученная сумма (0 до оплаты)")
    price: int = Field(..., ge=0, description="Снапшот цены трека")

    # Флаги
    has_been_approved: bool = Field(False, description="Запрос одобрен продюсером")
    has_finished_payment: bool = Field(False, description="Оплата завершена")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_payment_matches_settlement(self) -> "Transaction":
        """Частичная оплата не представима"""
        if self.has_finished_payment and self.payment != self.price:
            raise ValueError(
                f"settled transaction payment {self.payment} must equal price {self.price}"
            )
        if not self.has_finished_payment and self.payment != 0:
            raise ValueError(f"unsettled transaction payment must be 0, got {self.payment}")
        return self

    @property
    def state(self) -> TransactionState:
        if self.has_finished_payment:
            return TransactionState.SETTLED
        if self.has_been_approved:
            return TransactionState.APPROVED
        return TransactionState.REQUESTED

    def approved(self) -> "Transaction":
        """Новая версия транзакции с has_been_approved=True."""
        return self.model_copy(update={"has_been_approved": True})

    def settled(self, amount: int) -> "Transaction":
        """Новая версия транзакции после успешного перевода средств."""
        return Transaction(
            **{**self.model_dump(), "payment": amount, "has_finished_payment": True}
        )
