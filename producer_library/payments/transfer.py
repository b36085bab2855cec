"""
Funds transfer: внешний платёжный канал.

Маркетплейс видит канал как непрозрачный примитив "перевести amount
получателю X", который либо успешен, либо нет. Канал вызывается синхронно
с таймаутом: таймаут или исключение канала превращаются в неуспешный
TransferResult, и ledger отвечает TransferFailedError без изменения состояния.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Optional, Protocol

from producer_library.core.config import TRANSFER_TIMEOUT_SEC_DEFAULT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Результат перевода средств."""

    success: bool
    reference: Optional[str] = None  # Идентификатор перевода в канале (если успешен)
    failure_reason: Optional[str] = None

    @classmethod
    def ok(cls, reference: Optional[str] = None) -> "TransferResult":
        return cls(success=True, reference=reference)

    @classmethod
    def failed(cls, reason: str) -> "TransferResult":
        return cls(success=False, failure_reason=reason)


class FundsTransfer(Protocol):
    """Протокол платёжного канала."""

    def transfer(self, recipient: str, amount: int) -> TransferResult:
        """Перевести amount получателю recipient."""
        ...


class TimedFundsTransfer:
    """Обёртка канала: синхронный вызов с таймаутом.

    Вызов выполняется в пуле потоков, ожидание ограничено timeout_sec.
    - Канал вернул результат → результат как есть
    - Канал бросил исключение → failed("transfer_error: ...")
    - Истёк таймаут → failed("transfer_timeout")
    - Пул остановлен (close) → failed("transfer_unavailable")

    Поток зависшего вызова не прерывается; после таймаута его результат
    игнорируется. Если зависших вызовов больше, чем потоков, новые вызовы
    ждут в очереди; это логируется как насыщение пула.
    """

    def __init__(
        self,
        inner: FundsTransfer,
        timeout_sec: float = TRANSFER_TIMEOUT_SEC_DEFAULT,
        max_workers: int = 4
    ):
        if timeout_sec <= 0:
            raise ValueError(f"timeout_sec must be positive, got {timeout_sec}")

        self.inner = inner
        self.timeout_sec = timeout_sec
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="funds-transfer"
        )

        # Вызовы, ещё занимающие поток пула (включая зависшие после таймаута)
        self._in_flight_lock = threading.Lock()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        with self._in_flight_lock:
            return self._in_flight

    def transfer(self, recipient: str, amount: int) -> TransferResult:
        try:
            future = self._executor.submit(self.inner.transfer, recipient, amount)
        except RuntimeError as e:
            # Пул остановлен через close()
            logger.warning(
                "Funds transfer rejected: %s: recipient=%r amount=%d", e, recipient, amount
            )
            return TransferResult.failed("transfer_unavailable")

        with self._in_flight_lock:
            self._in_flight += 1
            in_flight = self._in_flight
        future.add_done_callback(self._release)

        if in_flight > self.max_workers:
            logger.warning(
                "Funds transfer pool saturated: %d calls in flight, %d workers",
                in_flight, self.max_workers
            )

        try:
            result = future.result(timeout=self.timeout_sec)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(
                "Funds transfer timed out after %.2fs: recipient=%r amount=%d",
                self.timeout_sec, recipient, amount
            )
            return TransferResult.failed("transfer_timeout")
        except Exception as e:
            logger.warning(
                "Funds transfer raised %s: recipient=%r amount=%d",
                type(e).__name__, recipient, amount
            )
            return TransferResult.failed(f"transfer_error: {e}")

        if not isinstance(result, TransferResult):
            return TransferResult.failed(f"invalid_transfer_result: {result!r}")

        return result

    def close(self) -> None:
        """Остановка пула потоков (без ожидания зависших вызовов).

        После close() каждый transfer возвращает failed("transfer_unavailable").
        """
        self._executor.shutdown(wait=False)

    def _release(self, future) -> None:
        with self._in_flight_lock:
            self._in_flight -= 1
