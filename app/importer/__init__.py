"""
app/importer package marker.
"""

from app.importer.chunk_worker import ChunkWorker
from app.importer.chunking import DEFAULT_CHUNK_SIZE, split_into_chunks
from app.importer.duplicate_filter import DuplicateFilter, FilterResult
from app.importer.persister import RecordPersister
from app.importer.worker_pool import DEFAULT_MAX_WORKERS, ImportWorkerPool, WorkerPoolClosedError

__all__ = [
    "ChunkWorker",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MAX_WORKERS",
    "DuplicateFilter",
    "FilterResult",
    "ImportWorkerPool",
    "RecordPersister",
    "WorkerPoolClosedError",
    "split_into_chunks",
]
