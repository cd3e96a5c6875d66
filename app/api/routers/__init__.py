"""
app/api/routers package marker.
"""

from app.api.routers.deals import router as deals_router

__all__ = [
    "deals_router",
]
