"""
app/services package marker.
"""

from app.services.deal_import_service import (
    DealImportService,
    get_deal_import_service,
    get_import_worker_pool,
    shutdown_import_worker_pool,
)

__all__ = [
    "DealImportService",
    "get_deal_import_service",
    "get_import_worker_pool",
    "shutdown_import_worker_pool",
]
