from smart_broadband.repositories.clients import ClientRepository, parse_client_id
from smart_broadband.repositories.result import StorageResult, StorageStatus

__all__ = ["ClientRepository", "StorageResult", "StorageStatus", "parse_client_id"]
