from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class StorageStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """Outcome of a single storage call.

    Handlers branch on ``status`` instead of catching database exceptions;
    ``error`` keeps the original exception for server-side logging only.
    """

    status: StorageStatus
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: T) -> StorageResult[T]:
        return cls(status=StorageStatus.OK, value=value)

    @classmethod
    def not_found(cls) -> StorageResult[T]:
        return cls(status=StorageStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: Exception) -> StorageResult[T]:
        return cls(status=StorageStatus.FAILED, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is StorageStatus.OK
