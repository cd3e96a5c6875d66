"""
tests/conftest.py

Shared fixtures for the deal import test suite.

``FakeDealStore`` is an in-memory, thread-safe stand-in for the SQLAlchemy
repository. It enforces identifier uniqueness on save and records every
lookup and save call so tests can assert on query volume.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Iterator
from datetime import datetime
from decimal import Decimal
from threading import Lock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.domain.deal import DealRecord
from app.importer.worker_pool import ImportWorkerPool
from app.repositories.errors import DealStoreError, DuplicateDealError
from db.base import Base
import db.models  # noqa: F401 (registers all ORM models on Base.metadata)


class FakeDealStore:
    def __init__(
        self,
        *,
        existing: Iterable[str] = (),
        failing_ids: Iterable[str] = (),
        lookup_error: Exception | None = None,
    ) -> None:
        self._stored: set[str] = set(existing)
        self._failing_ids = set(failing_ids)
        self._lookup_error = lookup_error
        self._lock = Lock()
        self.lookup_calls: list[set[str]] = []
        self.save_calls: list[str] = []
        self.saved_records: list[DealRecord] = []

    @property
    def stored_ids(self) -> set[str]:
        with self._lock:
            return set(self._stored)

    def find_existing_ids(self, deal_ids: Collection[str]) -> set[str]:
        with self._lock:
            self.lookup_calls.append(set(deal_ids))
            if self._lookup_error is not None:
                raise self._lookup_error
            return {deal_id for deal_id in deal_ids if deal_id in self._stored}

    def save(self, record: DealRecord) -> None:
        with self._lock:
            self.save_calls.append(record.deal_unique_id)
            if record.deal_unique_id in self._failing_ids:
                raise DealStoreError("Simulated DB Error")
            if record.deal_unique_id in self._stored:
                raise DuplicateDealError(f"Deal {record.deal_unique_id!r} already exists.")
            self._stored.add(record.deal_unique_id)
            self.saved_records.append(record)


@pytest.fixture()
def make_deal() -> Callable[..., DealRecord]:
    def _make(
        deal_unique_id: str,
        from_currency: str = "USD",
        to_currency: str = "MAD",
        amount: str = "10",
    ) -> DealRecord:
        return DealRecord(
            deal_unique_id=deal_unique_id,
            from_currency=from_currency,
            to_currency=to_currency,
            deal_timestamp=datetime(2026, 2, 26, 10, 15, 30),
            deal_amount=Decimal(amount),
        )

    return _make


@pytest.fixture()
def make_deals(make_deal: Callable[..., DealRecord]) -> Callable[[int], list[DealRecord]]:
    def _make(count: int, prefix: str = "ID-") -> list[DealRecord]:
        return [make_deal(f"{prefix}{index}") for index in range(count)]

    return _make


@pytest.fixture()
def make_store() -> Callable[..., FakeDealStore]:
    return FakeDealStore


@pytest.fixture()
def store() -> FakeDealStore:
    return FakeDealStore()


@pytest.fixture()
def pool() -> Iterator[ImportWorkerPool]:
    worker_pool = ImportWorkerPool(max_workers=4)
    try:
        yield worker_pool
    finally:
        worker_pool.shutdown(wait=True)


@pytest.fixture()
def session_factory(tmp_path) -> Iterator[sessionmaker[Session]]:
    """File-backed SQLite database so worker threads get their own connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'deals.db'}",
        connect_args={"timeout": 30},
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, class_=Session, expire_on_commit=False)
    try:
        yield factory
    finally:
        engine.dispose()
