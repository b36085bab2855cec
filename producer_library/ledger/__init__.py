"""Transaction Ledger: журнал покупок и машина состояний транзакции."""

from .ledger import TransactionLedger, TRANSACTION_NOT_FOUND_MESSAGE

__all__ = [
    "TransactionLedger",
    "TRANSACTION_NOT_FOUND_MESSAGE",
]
