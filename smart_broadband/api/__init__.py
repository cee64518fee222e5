from smart_broadband.api.routers import api_router

__all__ = ["api_router"]
