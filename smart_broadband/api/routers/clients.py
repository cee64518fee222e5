import logging
import math

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from smart_broadband.api.deps import get_client_repository
from smart_broadband.repositories import ClientRepository, StorageResult, StorageStatus, parse_client_id
from smart_broadband.schemas.client import ClientEnvelope, ClientPage, ClientRead, ClientWrite, ErrorBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])

PAGE_SIZE = 10
# Keeps OFFSET inside a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // PAGE_SIZE
NOT_FOUND_MESSAGE = "Client not found"

# Fixed per-endpoint bodies for storage failures, keyed by route name.
FAILURE_MESSAGES = {
    "list_clients": "Failed to fetch clients",
    "get_client": "Failed to fetch client",
    "create_client": "Failed to add client",
    "update_client": "Failed to update client",
    "delete_client": "Failed to delete client",
}

ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorBody},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _not_found() -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


def _failure(result: StorageResult, route_name: str) -> JSONResponse:
    if result.status is StorageStatus.NOT_FOUND:
        return _not_found()
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, FAILURE_MESSAGES[route_name])


def parse_page(raw: str | None) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    if page <= 0:
        return 1
    return min(page, MAX_PAGE)


@router.get("", name="list_clients", response_model=ClientPage, responses=ERROR_RESPONSES)
async def list_clients(
    page: str | None = Query(default=None, description="1-based page number"),
    repository: ClientRepository = Depends(get_client_repository),
):
    current_page = parse_page(page)
    result = await repository.list_page(limit=PAGE_SIZE, offset=(current_page - 1) * PAGE_SIZE)
    if not result.is_ok:
        return _failure(result, "list_clients")

    rows, total = result.value
    return ClientPage(
        data=[ClientRead.model_validate(row) for row in rows],
        current_page=current_page,
        total_pages=math.ceil(total / PAGE_SIZE),
        total_clients=total,
    )


@router.get("/{client_id}", name="get_client", response_model=ClientRead, responses=ERROR_RESPONSES)
async def get_client(client_id: str, repository: ClientRepository = Depends(get_client_repository)):
    parsed_id = parse_client_id(client_id)
    if parsed_id is None:
        return _not_found()

    result = await repository.get(parsed_id)
    if not result.is_ok:
        return _failure(result, "get_client")
    return ClientRead.model_validate(result.value)


@router.post("", name="create_client", response_model=ClientEnvelope, responses=ERROR_RESPONSES)
async def create_client(
    payload: ClientWrite,
    repository: ClientRepository = Depends(get_client_repository),
):
    # Unset fields fall back to column defaults (has_bonus=false).
    result = await repository.create(payload.model_dump(exclude_unset=True))
    if not result.is_ok:
        return _failure(result, "create_client")

    client = ClientRead.model_validate(result.value)
    logger.info("Client added: client_id=%s", client.id)
    return ClientEnvelope(message="Client added successfully", client=client)


@router.put("/{client_id}", name="update_client", response_model=ClientEnvelope, responses=ERROR_RESPONSES)
async def update_client(
    client_id: str,
    payload: ClientWrite,
    repository: ClientRepository = Depends(get_client_repository),
):
    parsed_id = parse_client_id(client_id)
    if parsed_id is None:
        return _not_found()

    result = await repository.replace(parsed_id, payload.model_dump())
    if not result.is_ok:
        return _failure(result, "update_client")

    client = ClientRead.model_validate(result.value)
    logger.info("Client updated: client_id=%s", client.id)
    return ClientEnvelope(message="Client updated successfully", client=client)


@router.delete("/{client_id}", name="delete_client", response_model=ClientEnvelope, responses=ERROR_RESPONSES)
async def delete_client(
    client_id: str,
    repository: ClientRepository = Depends(get_client_repository),
):
    parsed_id = parse_client_id(client_id)
    if parsed_id is None:
        return _not_found()

    result = await repository.delete(parsed_id)
    if not result.is_ok:
        return _failure(result, "delete_client")

    client = ClientRead.model_validate(result.value)
    logger.info("Client deleted: client_id=%s", client.id)
    return ClientEnvelope(message="Client deleted successfully", client=client)
