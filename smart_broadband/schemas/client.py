from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def to_utc_iso(value: datetime, timespec: str = "auto") -> str:
    """ISO-8601 with a trailing Z; naive values are stored as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec=timespec).replace("+00:00", "Z")


class ClientWrite(BaseModel):
    """Mutable client fields as sent by the frontend.

    Nothing is required here: a missing ``full_name`` is rejected by the
    NOT NULL column, not by the schema.
    """

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    service_type: str | None = None
    serial_number: str | None = None
    price: Decimal | None = None
    supporter: str | None = None
    has_bonus: bool | None = None


class ClientRead(BaseModel):
    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    service_type: str | None = None
    serial_number: str | None = None
    price: Decimal | None = None
    supporter: str | None = None
    has_bonus: bool | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return to_utc_iso(value)


class ClientPage(BaseModel):
    data: list[ClientRead]
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_clients: int = Field(alias="totalClients")

    model_config = ConfigDict(populate_by_name=True)


class ClientEnvelope(BaseModel):
    message: str
    client: ClientRead


class HealthStatus(BaseModel):
    message: str
    timestamp: str


class ErrorBody(BaseModel):
    error: str
