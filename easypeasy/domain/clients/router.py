"""Client router - FastAPI endpoints for client operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Client
from .schemas import (
    BatchDeleteRequest,
    ClientCreate,
    ClientResponse,
    ClientStatus,
    ClientType,
    ClientUpdate,
)
from .service import ClientService


router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def to_response(c: Client) -> ClientResponse:
    return ClientResponse(
        id=c.id,
        public_id=c.public_id,
        clientType=c.client_type,
        displayName=c.display_name,
        firstName=c.first_name,
        lastName=c.last_name,
        taxCode=c.tax_code,
        companyName=c.company_name,
        vatNumber=c.vat_number,
        numberOfChildren=c.number_of_children,
        ageRange=c.age_range,
        email=c.email,
        phone=c.phone,
        address=c.address,
        city=c.city,
        province=c.province,
        zipCode=c.zip_code,
        status=c.status,
        notes=c.notes,
        isDeleted=c.is_deleted,
        created_at=c.created_at,
    )


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    client_type: Optional[ClientType] = Query(None),
    status: Optional[ClientStatus] = Query(None),
    search: Optional[str] = Query(None),
    include_deleted: bool = Query(False),
    service: ClientService = Depends(get_client_service),
):
    """Get all clients (excludes deleted clients by default)"""
    clients = service.get_clients(client_type, status, search, include_deleted)
    return [to_response(c) for c in clients]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
):
    return to_response(service.get_client(client_id))


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
):
    """Create a new client"""
    return to_response(service.create_client(data))


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    return to_response(service.update_client(client_id, data))


@router.delete("/{client_id}")
async def delete_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
):
    """Move a client to the trash"""
    return service.delete_client(client_id)


@router.post("/{client_id}/restore", response_model=ClientResponse)
async def restore_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
):
    return to_response(service.restore_client(client_id))


@router.post("/batch-delete")
async def batch_delete_clients(
    data: BatchDeleteRequest,
    service: ClientService = Depends(get_client_service),
):
    """Batch delete multiple clients"""
    return service.batch_delete_clients(data.clientIds)
