"""
app/importer/chunk_worker.py

Filter-then-persist processing for a single chunk.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.deal import ChunkOutcome, DealRecord
from app.importer.duplicate_filter import DuplicateFilter
from app.importer.persister import RecordPersister
from app.repositories.deal_repository import DealStore
from app.repositories.errors import DealStoreError

logger = logging.getLogger(__name__)


class ChunkWorker:
    """
    Processes one chunk end-to-end and returns its local counts.

    Records inside a chunk are handled sequentially. Duplicates count as
    failed-or-skipped without a save attempt; each remaining record gets
    exactly one save attempt.
    """

    def __init__(
        self,
        *,
        duplicate_filter: DuplicateFilter,
        persister: RecordPersister,
    ) -> None:
        self._duplicate_filter = duplicate_filter
        self._persister = persister

    @classmethod
    def for_store(cls, store: DealStore) -> ChunkWorker:
        return cls(
            duplicate_filter=DuplicateFilter(store),
            persister=RecordPersister(store),
        )

    def process(self, chunk: Sequence[DealRecord]) -> ChunkOutcome:
        if not chunk:
            return ChunkOutcome()

        try:
            filtered = self._duplicate_filter.partition(chunk)
        except DealStoreError as exc:
            # Without the lookup no record can be classified, so none is saved.
            logger.error(
                "Duplicate lookup failed for chunk of %d deals starting at %s: %s",
                len(chunk),
                chunk[0].deal_unique_id,
                exc,
            )
            return ChunkOutcome(imported=0, failed_or_skipped=len(chunk))

        imported = 0
        failed_or_skipped = len(filtered.duplicates)
        for record in filtered.new:
            if self._persister.persist(record).saved:
                imported += 1
            else:
                failed_or_skipped += 1

        logger.debug(
            "Chunk processed size=%d imported=%d failed_or_skipped=%d",
            len(chunk),
            imported,
            failed_or_skipped,
        )
        return ChunkOutcome(imported=imported, failed_or_skipped=failed_or_skipped)
