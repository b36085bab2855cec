"""
In-memory платёжный канал.

Для тестов и демонстрации: хранит балансы получателей и историю
переводов, умеет отклонять переводы (decline) и имитировать задержку.
"""

import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from .transfer import TransferResult


@dataclass(frozen=True)
class TransferRecord:
    """Запись об успешном переводе."""

    reference: str
    recipient: str
    amount: int


class InMemoryFundsTransfer:
    """In-memory реализация FundsTransfer.

    Args:
        decline_reason: если задан, все переводы отклоняются с этой причиной
        delay_sec: искусственная задержка каждого перевода (для проверки таймаута)
    """

    def __init__(self, decline_reason: Optional[str] = None, delay_sec: float = 0.0):
        self.decline_reason = decline_reason
        self.delay_sec = delay_sec

        self._lock = threading.Lock()
        self._balances: Dict[str, int] = {}
        self._history: List[TransferRecord] = []
        self.attempts = 0

    def transfer(self, recipient: str, amount: int) -> TransferResult:
        with self._lock:
            self.attempts += 1

        if self.delay_sec > 0:
            time.sleep(self.delay_sec)

        if self.decline_reason is not None:
            return TransferResult.failed(self.decline_reason)

        reference = f"tr_{uuid.uuid4().hex[:12]}"
        with self._lock:
            self._balances[recipient] = self._balances.get(recipient, 0) + amount
            self._history.append(TransferRecord(reference=reference, recipient=recipient, amount=amount))

        return TransferResult.ok(reference)

    def balance_of(self, recipient: str) -> int:
        with self._lock:
            return self._balances.get(recipient, 0)

    @property
    def history(self) -> List[TransferRecord]:
        with self._lock:
            return list(self._history)
