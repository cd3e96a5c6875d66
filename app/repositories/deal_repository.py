"""
app/repositories/deal_repository.py

Persistence layer for FX deals.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.deal import DealRecord
from app.repositories.errors import DealStoreError, DuplicateDealError
from db.models.deal import Deal


class DealStore(Protocol):
    """
    Storage operations the import pipeline depends on.

    Implementations must be safe to call from several worker threads at once.
    """

    def find_existing_ids(self, deal_ids: Collection[str]) -> set[str]:
        ...

    def save(self, record: DealRecord) -> None:
        ...


class DealRepository:
    """
    SQLAlchemy-backed deal store.

    Every call opens its own short-lived session, so one instance can be
    shared by all import workers.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_existing_ids(self, deal_ids: Collection[str]) -> set[str]:
        """
        Return the subset of ``deal_ids`` already stored.
        """

        if not deal_ids:
            return set()

        stmt = select(Deal.deal_unique_id).where(Deal.deal_unique_id.in_(set(deal_ids)))
        try:
            with self._session_factory() as session:
                return set(session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise DealStoreError("Failed to look up existing deal identifiers.") from exc

    def save(self, record: DealRecord) -> None:
        """
        Insert one deal and commit it.

        Raises DuplicateDealError when the identifier is already taken and
        DealStoreError for any other storage failure.
        """

        deal = Deal(
            deal_unique_id=record.deal_unique_id,
            from_currency=record.from_currency,
            to_currency=record.to_currency,
            deal_timestamp=record.deal_timestamp,
            deal_amount=record.deal_amount,
        )
        try:
            with self._session_factory() as session, session.begin():
                session.add(deal)
        except IntegrityError as exc:
            raise DuplicateDealError(
                f"Deal {record.deal_unique_id!r} already exists."
            ) from exc
        except SQLAlchemyError as exc:
            raise DealStoreError(f"Failed to save deal {record.deal_unique_id!r}.") from exc
