"""
Domain models and value objects.

Contains Track, Transaction and caller roles.
"""

from producer_library.core.domain.identity import (
    PRODUCER_ONLY_MESSAGE,
    Role,
    authorize,
    resolve_role,
)
from producer_library.core.domain.track import Track, TrackStatus
from producer_library.core.domain.transaction import Transaction, TransactionState

__all__ = [
    # Identity
    "PRODUCER_ONLY_MESSAGE",
    "Role",
    "authorize",
    "resolve_role",
    # Track model
    "Track",
    "TrackStatus",
    # Transaction model
    "Transaction",
    "TransactionState",
]
