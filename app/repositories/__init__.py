"""
app/repositories package marker.
"""

from app.repositories.deal_repository import DealRepository, DealStore
from app.repositories.errors import DealStoreError, DuplicateDealError

__all__ = [
    "DealRepository",
    "DealStore",
    "DealStoreError",
    "DuplicateDealError",
]
