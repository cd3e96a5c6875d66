"""
app/services/deal_import_service.py

Concurrent chunked import of FX deal batches.

A batch is split into fixed-size chunks; every chunk is submitted to the
shared worker pool as an independent unit of work. Each unit runs one
duplicate lookup followed by one save per surviving deal and returns its own
``ChunkOutcome``. The calling thread blocks until every unit is done and
merges the outcomes into a single ``DealImportSummary``. Units never share
mutable state, so the merge is the only synchronization point.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Future, wait
from functools import lru_cache

from app.config import get_deal_import_settings
from app.domain.deal import ChunkOutcome, DealImportSummary, DealRecord
from app.importer.chunk_worker import ChunkWorker
from app.importer.chunking import DEFAULT_CHUNK_SIZE, split_into_chunks
from app.importer.worker_pool import ImportWorkerPool
from app.repositories.deal_repository import DealRepository, DealStore

logger = logging.getLogger(__name__)


class DealImportService:
    """
    Coordinates chunking, parallel dispatch, and result aggregation.
    """

    def __init__(
        self,
        *,
        store: DealStore,
        pool: ImportWorkerPool,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        worker: ChunkWorker | None = None,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}.")
        self._pool = pool
        self._chunk_size = chunk_size
        self._worker = worker or ChunkWorker.for_store(store)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def import_deals(self, records: Sequence[DealRecord] | None) -> DealImportSummary:
        """
        Persist the new deals in ``records`` and return the batch counts.

        Deals whose identifier is already stored, and deals whose save fails,
        are counted in ``failed_or_skipped``. Returns only after every chunk
        has been processed.
        """

        if not records:
            return DealImportSummary.empty()

        total_received = len(records)
        chunks = split_into_chunks(records, self._chunk_size)
        logger.info(
            "Importing %d deals in %d chunk(s) of up to %d",
            total_received,
            len(chunks),
            self._chunk_size,
        )

        futures: list[Future[ChunkOutcome]] = [
            self._pool.submit(self._worker.process, chunk) for chunk in chunks
        ]
        wait(futures)

        outcome = ChunkOutcome()
        for future in futures:
            outcome += future.result()

        summary = DealImportSummary.from_outcome(total_received, outcome)
        logger.info(
            "Finished processing all %d deals imported=%d failed_or_skipped=%d",
            summary.total_received,
            summary.successful_imports,
            summary.failed_or_skipped,
        )
        return summary


@lru_cache(maxsize=1)
def get_import_worker_pool() -> ImportWorkerPool:
    """
    Build and cache the process-wide import worker pool.
    """

    return ImportWorkerPool(max_workers=get_deal_import_settings().max_workers)


def shutdown_import_worker_pool() -> None:
    """
    Drain and release the cached worker pool, if one was created.
    """

    if get_import_worker_pool.cache_info().currsize:
        get_import_worker_pool().shutdown(wait=True)
        get_import_worker_pool.cache_clear()
        get_deal_import_service.cache_clear()


@lru_cache(maxsize=1)
def get_deal_import_service() -> DealImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    from db.session import SessionLocal

    settings = get_deal_import_settings()
    return DealImportService(
        store=DealRepository(SessionLocal),
        pool=get_import_worker_pool(),
        chunk_size=settings.chunk_size,
    )
