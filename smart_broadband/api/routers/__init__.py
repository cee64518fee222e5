from fastapi import APIRouter

from smart_broadband.api.routers.clients import router as clients_router
from smart_broadband.api.routers.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(clients_router)

__all__ = ["api_router"]
