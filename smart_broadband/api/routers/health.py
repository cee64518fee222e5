from datetime import datetime, timezone

from fastapi import APIRouter

from smart_broadband.schemas.client import HealthStatus, to_utc_iso

router = APIRouter(tags=["health"])

HEALTH_MESSAGE = "Smart Broadband Server is running!"


@router.get("/health", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(message=HEALTH_MESSAGE, timestamp=to_utc_iso(datetime.now(timezone.utc), "milliseconds"))
