"""
Роли и проверка прав вызывающего.

Идентичность вызывающего поставляет внешний слой аутентификации на каждый
вызов. Роль вычисляется сравнением с идентичностью продюсера, заданной
при инициализации системы.
"""

from enum import Enum

from producer_library.core.errors import ForbiddenError


PRODUCER_ONLY_MESSAGE = "Only the producer can invoke this functionality."


class Role(str, Enum):
    """Роль вызывающего"""

    PRODUCER = "producer"
    CUSTOMER = "customer"


def resolve_role(caller: str, producer_identity: str) -> Role:
    """Роль вызывающего относительно продюсера."""
    if caller == producer_identity:
        return Role.PRODUCER
    return Role.CUSTOMER


def authorize(caller: str, producer_identity: str, required_role: Role) -> None:
    """
    Guard clause в начале операции фасада.

    Args:
        caller: идентичность вызывающего
        producer_identity: идентичность продюсера
        required_role: требуемая роль

    Raises:
        ForbiddenError: если роль вызывающего не совпадает с требуемой
    """
    role = resolve_role(caller, producer_identity)
    if role == required_role:
        return

    if required_role == Role.PRODUCER:
        message = PRODUCER_ONLY_MESSAGE
    else:
        message = "The producer cannot submit a purchase request."

    raise ForbiddenError(
        message,
        details={"caller": caller, "required_role": required_role.value}
    )
