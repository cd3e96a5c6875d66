"""
app/importer/duplicate_filter.py

Separate a chunk into new deals and deals already present in storage.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from app.domain.deal import DealRecord
from app.repositories.deal_repository import DealStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterResult:
    new: list[DealRecord] = field(default_factory=list)
    duplicates: list[DealRecord] = field(default_factory=list)


class DuplicateFilter:
    """
    Checks a whole chunk against storage with a single lookup.

    Only stored identifiers count as duplicates. Two records sharing an
    identifier inside the same chunk both pass; the storage uniqueness
    constraint rejects the later one when it is saved.
    """

    def __init__(self, store: DealStore) -> None:
        self._store = store

    def partition(self, chunk: Sequence[DealRecord]) -> FilterResult:
        if not chunk:
            return FilterResult()

        existing_ids = self._store.find_existing_ids({record.deal_unique_id for record in chunk})

        result = FilterResult()
        for record in chunk:
            if record.deal_unique_id in existing_ids:
                logger.warning("Duplicate deal ignored: %s", record.deal_unique_id)
                result.duplicates.append(record)
            else:
                result.new.append(record)
        return result
