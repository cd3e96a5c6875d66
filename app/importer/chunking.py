"""
app/importer/chunking.py

Split an incoming batch into fixed-size, order-preserving chunks.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 1000


def split_into_chunks(records: Sequence[T], chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[list[T]]:
    """
    Return ``ceil(len(records) / chunk_size)`` consecutive chunks.

    Every chunk holds ``chunk_size`` records except possibly the last one.
    An empty input yields no chunks.
    """

    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}.")

    return [
        list(records[start : start + chunk_size])
        for start in range(0, len(records), chunk_size)
    ]
