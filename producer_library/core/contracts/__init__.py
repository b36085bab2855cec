"""
Contract Validation Module

Модуль для валидации JSON контрактов наблюдаемого состояния маркетплейса.
"""

from .validators import (
    ContractValidator,
    MarketplaceStateValidator,
    SchemaLoader,
    validate_marketplace_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MarketplaceStateValidator",
    # Functions
    "validate_marketplace_state",
]
