"""
Конфигурация маркетплейса.

Задаётся один раз при создании Marketplace и далее не меняется.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final


# Жёсткий потолок end для постраничной выдачи каталога
PAGINATION_LIMIT_DEFAULT: Final[int] = 100

# Таймаут ожидания внешнего платёжного канала (секунды)
TRANSFER_TIMEOUT_SEC_DEFAULT: Final[float] = 5.0


class ExistenceCheck(str, Enum):
    """
    Способ проверки существования трека.

    ALLOCATED: id когда-либо выделялся (id < next_track_id), удалённые треки
               считаются существующими для update/delete/purchase.
    LIVE: слот трека не удалён (status == LIVE).
    """

    ALLOCATED = "allocated"
    LIVE = "live"


@dataclass(frozen=True)
class MarketplaceConfig:
    """
    Конфигурация Marketplace.

    - pagination_limit: end в get_tracks должен быть строго меньше
    - transfer_timeout_sec: сколько ждать платёжный канал до TransferFailed
    - existence_check: правило существования трека (по умолчанию ALLOCATED)
    """
    pagination_limit: int = PAGINATION_LIMIT_DEFAULT
    transfer_timeout_sec: float = TRANSFER_TIMEOUT_SEC_DEFAULT
    existence_check: ExistenceCheck = ExistenceCheck.ALLOCATED

    def __post_init__(self):
        if self.pagination_limit <= 0:
            raise ValueError(f"pagination_limit must be positive, got {self.pagination_limit}")
        if self.transfer_timeout_sec <= 0:
            raise ValueError(
                f"transfer_timeout_sec must be positive, got {self.transfer_timeout_sec}"
            )
