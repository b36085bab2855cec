"""Payments: протокол внешнего платёжного канала и его реализации."""

from .in_memory import InMemoryFundsTransfer, TransferRecord
from .transfer import FundsTransfer, TimedFundsTransfer, TransferResult

__all__ = [
    "FundsTransfer",
    "TransferResult",
    "TimedFundsTransfer",
    "InMemoryFundsTransfer",
    "TransferRecord",
]
