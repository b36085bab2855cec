"""
Валидация аргументов операций.

Нарушения приводят к ValueError (ошибка вызывающего кода),
а не к доменным ошибкам MarketplaceError.
"""


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация неотрицательного целого.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int (bool не принимается) или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_text(value: str, name: str) -> None:
    """
    Валидация текстового поля трека (пустая строка допустима).

    Raises:
        ValueError: Если value не str
    """
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")


def validate_identity(value: str, name: str = "caller") -> None:
    """
    Валидация идентичности вызывающего.

    Идентичность поставляет внешний слой аутентификации; здесь проверяется
    только, что это непустая строка.

    Raises:
        ValueError: Если value не str или состоит из пробелов
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
