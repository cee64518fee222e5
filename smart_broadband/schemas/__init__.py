from smart_broadband.schemas.client import (
    ClientEnvelope,
    ClientPage,
    ClientRead,
    ClientWrite,
    ErrorBody,
    HealthStatus,
)

__all__ = [
    "ClientEnvelope",
    "ClientPage",
    "ClientRead",
    "ClientWrite",
    "ErrorBody",
    "HealthStatus",
]
