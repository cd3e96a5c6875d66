"""
app/importer/worker_pool.py

Process-wide bounded thread pool that runs chunk work.

Lifecycle
----------
Create one ``ImportWorkerPool`` on application start, hand it to the import
service, and call ``shutdown()`` on application stop. Shutdown waits for
in-flight chunks to finish before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from types import TracebackType
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_WORKERS = 10
_THREAD_NAME_PREFIX = "deal-import"


class WorkerPoolClosedError(RuntimeError):
    """Raised when work is submitted to a pool that has been shut down."""


class ImportWorkerPool:
    """Fixed-size pool shared by every import call in the process."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}.")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=_THREAD_NAME_PREFIX,
        )
        self._lock = Lock()
        self._closed = False
        logger.info("Import worker pool started max_workers=%d", max_workers)

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, task: Callable[..., T], *args: object) -> Future[T]:
        with self._lock:
            if self._closed:
                raise WorkerPoolClosedError("Import worker pool has been shut down.")
            return self._executor.submit(task, *args)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.info("Import worker pool shut down wait=%s", wait)

    def __enter__(self) -> ImportWorkerPool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)
