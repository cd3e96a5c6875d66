"""
app/importer/persister.py

Store one deal and report the outcome as a value.
"""

from __future__ import annotations

import logging

from app.domain.deal import DealRecord, PersistResult
from app.repositories.deal_repository import DealStore

logger = logging.getLogger(__name__)


class RecordPersister:
    """
    Isolation boundary around ``DealStore.save``.

    Any fault raised while saving is logged and turned into a failed
    ``PersistResult``; nothing propagates to the chunk worker.
    """

    def __init__(self, store: DealStore) -> None:
        self._store = store

    def persist(self, record: DealRecord) -> PersistResult:
        try:
            self._store.save(record)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to save deal %s: %s", record.deal_unique_id, exc)
            return PersistResult.failure(record.deal_unique_id, str(exc) or type(exc).__name__)
        return PersistResult.success(record.deal_unique_id)
