"""
app/domain package marker.
"""

from app.domain.deal import ChunkOutcome, DealImportSummary, DealRecord, PersistResult

__all__ = [
    "ChunkOutcome",
    "DealImportSummary",
    "DealRecord",
    "PersistResult",
]
