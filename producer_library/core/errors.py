"""
Иерархия ошибок маркетплейса.

Все ошибки синхронные, возвращаются непосредственно вызывающему,
несут машинный код (error_code) и человекочитаемое сообщение.
Ни одна ошибка не оставляет частично применённых изменений состояния.
"""

from typing import Any, Dict, Optional


class MarketplaceError(Exception):
    """
    Базовое исключение для всех доменных ошибок маркетплейса.

    Повторная попытка не выполняется автоматически: решение о retry
    принимает вызывающий (например, TransferFailedError безопасно повторить).
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Представление ошибки для внешней обёртки (RPC/HTTP)."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(MarketplaceError):
    """
    Идентификатор трека или транзакции никогда не выделялся.

    Examples:
    - update_track(999) при 3 выделенных треках
    - approve_purchase_request(5) при пустом журнале
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:not_found", message, details)


class ForbiddenError(MarketplaceError):
    """
    У вызывающего нет требуемой роли или идентичности.

    Examples:
    - Покупатель пытается добавить трек
    - Продюсер отправляет запрос на покупку у самого себя
    - Чужой покупатель пытается оплатить транзакцию
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:forbidden", message, details)


class OutOfRangeError(MarketplaceError):
    """Начальный индекс пагинации вне диапазона выделенных треков."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:out_of_range", message, details)


class PaginationLimitExceededError(MarketplaceError):
    """Конечный индекс пагинации достиг жёсткого потолка (100)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:pagination_limit_exceeded", message, details)


class AmountMismatchError(MarketplaceError):
    """Переданная сумма не совпадает со снапшотом цены в транзакции."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:amount_mismatch", message, details)


class AlreadySettledError(MarketplaceError):
    """Повторная попытка оплаты уже оплаченной транзакции."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:already_settled", message, details)


class TransferFailedError(MarketplaceError):
    """
    Внешний платёжный канал отклонил перевод, упал или не ответил вовремя.

    Состояние транзакции не изменено, повтор безопасен.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("marketplace:transfer_failed", message, details)
