"""
app/domain/deal.py

Domain models used by the deal import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class DealRecord:
    """
    One incoming FX deal, read-only for the lifetime of an import.
    """

    deal_unique_id: str
    from_currency: str
    to_currency: str
    deal_timestamp: datetime
    deal_amount: Decimal


@dataclass(frozen=True)
class PersistResult:
    """
    Outcome of one attempt to store a deal.
    """

    deal_unique_id: str
    saved: bool
    reason: str | None = None

    @classmethod
    def success(cls, deal_unique_id: str) -> PersistResult:
        return cls(deal_unique_id=deal_unique_id, saved=True)

    @classmethod
    def failure(cls, deal_unique_id: str, reason: str) -> PersistResult:
        return cls(deal_unique_id=deal_unique_id, saved=False, reason=reason)


@dataclass(frozen=True)
class ChunkOutcome:
    """
    Counts produced by processing a single chunk.
    """

    imported: int = 0
    failed_or_skipped: int = 0

    @property
    def processed(self) -> int:
        return self.imported + self.failed_or_skipped

    def __add__(self, other: ChunkOutcome) -> ChunkOutcome:
        if not isinstance(other, ChunkOutcome):
            return NotImplemented
        return ChunkOutcome(
            imported=self.imported + other.imported,
            failed_or_skipped=self.failed_or_skipped + other.failed_or_skipped,
        )


@dataclass(frozen=True)
class DealImportSummary:
    """
    End-of-run import summary returned once per batch.

    ``total_received`` always equals ``successful_imports + failed_or_skipped``.
    """

    total_received: int
    successful_imports: int
    failed_or_skipped: int

    @classmethod
    def empty(cls) -> DealImportSummary:
        return cls(total_received=0, successful_imports=0, failed_or_skipped=0)

    @classmethod
    def from_outcome(cls, total_received: int, outcome: ChunkOutcome) -> DealImportSummary:
        if outcome.processed != total_received:
            raise ValueError(
                f"Chunk outcomes account for {outcome.processed} deals, "
                f"expected {total_received}."
            )
        return cls(
            total_received=total_received,
            successful_imports=outcome.imported,
            failed_or_skipped=outcome.failed_or_skipped,
        )
