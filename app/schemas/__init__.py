"""
app/schemas package marker.
"""

from app.schemas.deals import DealImportResponse, DealRequest, ProblemDetailResponse

__all__ = [
    "DealImportResponse",
    "DealRequest",
    "ProblemDetailResponse",
]
