"""Supplier router - FastAPI endpoints for suppliers and venues"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Supplier, Venue
from .schemas import (
    SupplierCreate,
    SupplierResponse,
    SupplierUpdate,
    VenueCreate,
    VenueResponse,
    VenueUpdate,
)
from .service import SupplierService

router = APIRouter(tags=["Suppliers"])


def get_supplier_service(db: Session = Depends(get_db)) -> SupplierService:
    """Dependency injection for SupplierService"""
    return SupplierService(db)


def venue_response(venue: Venue) -> VenueResponse:
    return VenueResponse(
        id=venue.id,
        supplierId=venue.supplier_id,
        supplierName=venue.supplier.company_name if venue.supplier else None,
        name=venue.name,
        address=venue.address,
        city=venue.city,
        capacity=venue.capacity,
        rentalCost=venue.rental_cost,
        color=venue.color,
        notes=venue.notes,
    )


def supplier_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,
        companyName=supplier.company_name,
        vatNumber=supplier.vat_number,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        city=supplier.city,
        province=supplier.province,
        zipCode=supplier.zip_code,
        notes=supplier.notes,
        isDeleted=supplier.is_deleted,
        venues=[venue_response(v) for v in supplier.venues],
        created_at=supplier.created_at,
    )


# ============================================================================
# SUPPLIERS
# ============================================================================


@router.get("/suppliers", response_model=list[SupplierResponse])
async def get_suppliers(
    include_deleted: bool = Query(False),
    search: Optional[str] = Query(None),
    service: SupplierService = Depends(get_supplier_service),
):
    """Get suppliers with their venues (excludes deleted suppliers by default)"""
    return [supplier_response(s) for s in service.get_suppliers(include_deleted, search)]


@router.get("/suppliers/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
):
    return supplier_response(service.get_supplier(supplier_id))


@router.post("/suppliers", response_model=SupplierResponse, status_code=201)
async def create_supplier(
    data: SupplierCreate,
    service: SupplierService = Depends(get_supplier_service),
):
    return supplier_response(service.create_supplier(data))


@router.patch("/suppliers/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: int,
    data: SupplierUpdate,
    service: SupplierService = Depends(get_supplier_service),
):
    return supplier_response(service.update_supplier(supplier_id, data))


@router.delete("/suppliers/{supplier_id}")
async def delete_supplier(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
):
    """Move a supplier to the trash"""
    return service.delete_supplier(supplier_id)


@router.post("/suppliers/{supplier_id}/restore", response_model=SupplierResponse)
async def restore_supplier(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
):
    return supplier_response(service.restore_supplier(supplier_id))


# ============================================================================
# VENUES
# ============================================================================


@router.get("/venues", response_model=list[VenueResponse])
async def get_all_venues(service: SupplierService = Depends(get_supplier_service)):
    """All venues of active suppliers (lookup for the lab form)"""
    return [venue_response(v) for v in service.get_all_venues()]


@router.get("/suppliers/{supplier_id}/venues", response_model=list[VenueResponse])
async def get_supplier_venues(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
):
    supplier = service.get_supplier(supplier_id)
    return [venue_response(v) for v in supplier.venues]


@router.post("/suppliers/{supplier_id}/venues", response_model=VenueResponse, status_code=201)
async def create_venue(
    supplier_id: int,
    data: VenueCreate,
    service: SupplierService = Depends(get_supplier_service),
):
    return venue_response(service.create_venue(supplier_id, data))


@router.patch("/suppliers/{supplier_id}/venues/{venue_id}", response_model=VenueResponse)
async def update_venue(
    supplier_id: int,
    venue_id: int,
    data: VenueUpdate,
    service: SupplierService = Depends(get_supplier_service),
):
    return venue_response(service.update_venue(supplier_id, venue_id, data))


@router.delete("/suppliers/{supplier_id}/venues/{venue_id}")
async def delete_venue(
    supplier_id: int,
    venue_id: int,
    service: SupplierService = Depends(get_supplier_service),
):
    """Delete a venue that hosts no labs"""
    return service.delete_venue(supplier_id, venue_id)
