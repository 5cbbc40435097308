"""API route modules."""

from oraclerelay.api.routes.entities import router as entities_router
from oraclerelay.api.routes.info import router as info_router
from oraclerelay.api.routes.manual import router as manual_router
from oraclerelay.api.routes.status import router as status_router

__all__ = [
    "entities_router",
    "info_router",
    "manual_router",
    "status_router",
]
