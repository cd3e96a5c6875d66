"""
tests/test_deal_import_service.py

Unit tests for DealImportService, the concurrent chunked coordinator.

Coverage
--------
- None / empty input short-circuits without touching the pool
- Count invariant total == imported + failed_or_skipped
- Pre-existing identifiers and simulated save faults
- One duplicate lookup per chunk regardless of pool size
- Intra-batch duplicate identifiers
- Re-running the same batch (idempotence)
- Chunk isolation when one chunk's lookup fails
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from app.domain.deal import DealImportSummary
from app.importer.worker_pool import ImportWorkerPool
from app.repositories.deal_repository import DealRepository
from app.repositories.errors import DealStoreError
from app.services.deal_import_service import DealImportService


def _service(store, pool, chunk_size: int = 1000) -> DealImportService:
    return DealImportService(store=store, pool=pool, chunk_size=chunk_size)


class TestEmptyInput:
    @pytest.mark.parametrize("records", [None, [], ()])
    def test_returns_zero_summary(self, store, records) -> None:
        pool = MagicMock(spec=ImportWorkerPool)

        summary = _service(store, pool).import_deals(records)

        assert summary == DealImportSummary(0, 0, 0)
        pool.submit.assert_not_called()
        assert store.lookup_calls == []


class TestCounts:
    def test_all_new_records_are_imported(self, store, pool, make_deals) -> None:
        summary = _service(store, pool, chunk_size=10).import_deals(make_deals(95))

        assert summary == DealImportSummary(
            total_received=95, successful_imports=95, failed_or_skipped=0
        )
        assert len(store.stored_ids) == 95

    def test_duplicate_and_save_fault(self, make_deal, pool) -> None:
        repository = MagicMock(spec=DealRepository)
        repository.find_existing_ids.return_value = {"ID-2"}

        def save(record) -> None:
            if record.deal_unique_id == "ID-3":
                raise RuntimeError("Simulated DB Error")

        repository.save.side_effect = save
        records = [make_deal("ID-1", "USD"), make_deal("ID-2", "EUR"), make_deal("ID-3", "GBP")]

        summary = _service(repository, pool).import_deals(records)

        assert summary.total_received == 3
        assert summary.successful_imports == 1
        assert summary.failed_or_skipped == 2
        assert repository.save.call_count == 2
        saved_ids = [call.args[0].deal_unique_id for call in repository.save.call_args_list]
        assert saved_ids == ["ID-1", "ID-3"]

    def test_pre_existing_record_counted_as_skipped(self, make_store, pool, make_deal) -> None:
        store = make_store(existing={"OLD-1"})

        summary = _service(store, pool).import_deals([make_deal("OLD-1"), make_deal("NEW-1")])

        assert summary == DealImportSummary(2, 1, 1)
        assert "OLD-1" not in store.save_calls

    def test_intra_batch_duplicate(self, store, pool, make_deal) -> None:
        records = [make_deal("IT-001"), make_deal("IT-002"), make_deal("IT-001")]

        summary = _service(store, pool).import_deals(records)

        assert summary == DealImportSummary(3, 2, 1)

    def test_rerun_is_idempotent(self, store, pool, make_deals) -> None:
        records = make_deals(30)
        service = _service(store, pool, chunk_size=7)

        first = service.import_deals(records)
        second = service.import_deals(records)

        assert first == DealImportSummary(30, 30, 0)
        assert second == DealImportSummary(30, 0, 30)
        assert len(store.save_calls) == 30

    @pytest.mark.parametrize("failing_every", [2, 3, 5])
    def test_invariant_holds_with_mixed_outcomes(
        self, make_store, pool, make_deals, failing_every: int
    ) -> None:
        records = make_deals(123)
        existing = {record.deal_unique_id for record in records[::7]}
        failing = {record.deal_unique_id for record in records[::failing_every]} - existing
        store = make_store(existing=existing, failing_ids=failing)

        summary = _service(store, pool, chunk_size=10).import_deals(records)

        assert summary.total_received == 123
        assert summary.total_received == summary.successful_imports + summary.failed_or_skipped
        assert summary.successful_imports == 123 - len(existing) - len(failing)


class TestChunking:
    @pytest.mark.parametrize("workers", [1, 3, 10])
    def test_one_lookup_per_chunk(self, store, make_deals, workers: int) -> None:
        with ImportWorkerPool(max_workers=workers) as pool:
            summary = _service(store, pool, chunk_size=1000).import_deals(make_deals(2500))

        assert len(store.lookup_calls) == 3
        assert sorted(len(ids) for ids in store.lookup_calls) == [500, 1000, 1000]
        assert len(store.save_calls) == 2500
        assert summary == DealImportSummary(2500, 2500, 0)

    def test_failed_chunk_lookup_does_not_affect_other_chunks(self, make_deals, pool) -> None:
        records = make_deals(30)
        first_chunk_ids = {record.deal_unique_id for record in records[:10]}

        repository = MagicMock(spec=DealRepository)

        def find_existing_ids(deal_ids):
            if set(deal_ids) == first_chunk_ids:
                raise DealStoreError("lookup timed out")
            return set()

        repository.find_existing_ids.side_effect = find_existing_ids

        summary = _service(repository, pool, chunk_size=10).import_deals(records)

        assert summary == DealImportSummary(30, 20, 10)
        saved_ids = {call.args[0].deal_unique_id for call in repository.save.call_args_list}
        assert saved_ids.isdisjoint(first_chunk_ids)
        assert len(saved_ids) == 20

    def test_rejects_non_positive_chunk_size(self, store, pool) -> None:
        with pytest.raises(ValueError):
            DealImportService(store=store, pool=pool, chunk_size=0)
